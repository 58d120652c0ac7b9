# donors/tasks.py
"""
Celery tasks for donor matching
"""
import logging

from celery import shared_task

from hospitals.lifecycle import match_donors
from hospitals.models import BloodRequest

logger = logging.getLogger(__name__)


@shared_task
def notify_matching_donors(blood_request_id):
    """
    Fill the notified set of a new blood request.
    Delivery of the actual alert (email, SMS, push) happens outside this system.
    """
    blood_request = BloodRequest.objects.filter(pk=blood_request_id).first()
    if blood_request is None:
        logger.warning("Blood request %s not found for matching", blood_request_id)
        return 0

    if blood_request.status != BloodRequest.PENDING:
        logger.info("Blood request %s is %s, skipping matching", blood_request_id, blood_request.status)
        return 0

    return match_donors(blood_request)
