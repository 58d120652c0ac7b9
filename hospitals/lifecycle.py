# hospitals/lifecycle.py
"""
Blood request lifecycle.

    pending -> accepted -> completed
    pending -> cancelled

Donors move a request out of pending by accepting it; the owning hospital
sets any status through update_request_status.
"""
import logging
from datetime import date

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from algorithms.eligibility import eligible_donors
from donors.models import DonorProfile
from raktsetu.exceptions import AuthorizationError, Conflict, InvalidState, NotFound, ValidationError
from .models import BloodRequest, DonorNotification, DonorResponse, HospitalProfile
from .serializers import BloodRequestCreateSerializer
from .verification import require_verified

logger = logging.getLogger(__name__)

STATUSES = [value for value, _ in BloodRequest.STATUS_CHOICES]
RESPONSES = [value for value, _ in DonorResponse.RESPONSE_CHOICES]


# ============================================
# CREATE
# ============================================
def create_blood_request(hospital, data):
    """
    Validate every field at once and persist a pending request owned by the hospital.
    Donor matching is dispatched from the post_save signal.
    """
    require_verified(hospital)

    serializer = BloodRequestCreateSerializer(data=data)
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)

    with transaction.atomic():
        blood_request = serializer.save(hospital=hospital, status=BloodRequest.PENDING)
        HospitalProfile.objects.filter(pk=hospital.pk).update(requests_made=F('requests_made') + 1)

    logger.info(
        "Blood request %s created by hospital %s (%s, urgent=%s)",
        blood_request.pk, hospital.pk, blood_request.blood_type, blood_request.urgent
    )
    return blood_request


# ============================================
# DONOR MATCHING
# ============================================
def match_donors(blood_request):
    """
    Add every eligible donor to the request's notified set.
    Safe to re-run: donors already notified are skipped.
    """
    donors = list(eligible_donors(blood_request))
    DonorNotification.objects.bulk_create(
        [DonorNotification(donor=donor, blood_request=blood_request) for donor in donors],
        ignore_conflicts=True,
    )
    logger.info("Blood request %s: %d donor(s) notified", blood_request.pk, len(donors))
    return len(donors)


# ============================================
# LISTINGS
# ============================================
def list_for_donor(donor):
    return BloodRequest.objects.filter(
        status=BloodRequest.PENDING,
        blood_type=donor.blood_group,
        notifications__donor=donor,
    ).select_related('hospital', 'hospital__user').order_by('-created_at')


def list_for_hospital(hospital):
    return BloodRequest.objects.filter(
        hospital=hospital
    ).select_related('accepted_by', 'accepted_by__user').order_by('-created_at')


# ============================================
# DONOR RESPONSE
# ============================================
def respond_to_request(donor, request_id, response):
    if response not in RESPONSES:
        raise ValidationError({'response': f"Must be one of: {', '.join(RESPONSES)}"})

    blood_request = BloodRequest.objects.filter(pk=request_id).first()
    if blood_request is None:
        raise NotFound("Blood request not found")

    if not DonorNotification.objects.filter(blood_request=blood_request, donor=donor).exists():
        raise AuthorizationError("You were not notified about this request")

    if blood_request.status != BloodRequest.PENDING:
        raise InvalidState(f"Blood request is already {blood_request.status}")

    if DonorResponse.objects.filter(blood_request=blood_request, donor=donor).exists():
        raise Conflict("You have already responded to this request")

    record_response(blood_request.pk, donor, response)
    blood_request.refresh_from_db()

    logger.info("Donor %s %s blood request %s", donor.pk, response, blood_request.pk)
    return blood_request


def record_response(request_id, donor, response):
    """
    Append the response and, for an accept, claim the request.

    The pending check and the status change are a single conditional UPDATE,
    so two donors racing to accept resolve to exactly one winner.
    """
    changes = {'updated_at': timezone.now()}
    if response == DonorResponse.ACCEPTED:
        changes.update(status=BloodRequest.ACCEPTED, accepted_by=donor)

    with transaction.atomic():
        updated = BloodRequest.objects.filter(
            pk=request_id, status=BloodRequest.PENDING
        ).update(**changes)
        if not updated:
            raise InvalidState("Blood request is no longer pending")

        try:
            with transaction.atomic():
                return DonorResponse.objects.create(
                    blood_request_id=request_id, donor=donor, response=response
                )
        except IntegrityError:
            raise Conflict("You have already responded to this request")


# ============================================
# STATUS UPDATE (OWNING HOSPITAL)
# ============================================
def update_request_status(hospital, request_id, new_status):
    """
    Only ownership is enforced; any of the four statuses may be set.
    """
    if new_status not in STATUSES:
        raise ValidationError({'status': f"Must be one of: {', '.join(STATUSES)}"})

    with transaction.atomic():
        blood_request = BloodRequest.objects.select_for_update().filter(pk=request_id).first()
        if blood_request is None:
            raise NotFound("Blood request not found")

        if blood_request.hospital_id != hospital.pk:
            raise AuthorizationError("Not authorized to update this request")

        previous = blood_request.status
        blood_request.status = new_status
        blood_request.save(update_fields=['status', 'updated_at'])

        if new_status == BloodRequest.COMPLETED and previous != BloodRequest.COMPLETED:
            _record_completion(blood_request)

    logger.info(
        "Blood request %s status %s -> %s by hospital %s",
        blood_request.pk, previous, new_status, hospital.pk
    )
    return blood_request


def _record_completion(blood_request):
    HospitalProfile.objects.filter(pk=blood_request.hospital_id).update(
        requests_completed=F('requests_completed') + 1
    )
    if blood_request.accepted_by_id:
        DonorProfile.objects.filter(pk=blood_request.accepted_by_id).update(
            donation_count=F('donation_count') + 1,
            last_donation_date=date.today(),
        )
