# hospitals/signals.py
"""
Dispatch donor matching when a blood request is created
"""
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from hospitals.models import BloodRequest
from donors.tasks import notify_matching_donors


@receiver(post_save, sender=BloodRequest)
def auto_match_donors(sender, instance, created, **kwargs):
    if created and instance.status == BloodRequest.PENDING:
        # Queue only after commit so the worker can see the row.
        transaction.on_commit(lambda: notify_matching_donors.delay(instance.pk))
