# hospitals/verification.py
"""
Hospital verification workflow: unverified <-> verified, admin-driven.
"""
import logging

from accounts.models import CustomUser
from raktsetu.exceptions import AuthorizationError, NotFound
from .models import HospitalProfile

logger = logging.getLogger(__name__)


def _require_admin(actor):
    if actor is None or actor.user_type != CustomUser.ADMIN:
        raise AuthorizationError("Access denied. Admin only.")


def _set_verified(actor, hospital_id, verified):
    _require_admin(actor)

    hospital = HospitalProfile.objects.select_related('user').filter(pk=hospital_id).first()
    if hospital is None:
        raise NotFound("Hospital not found")

    if hospital.is_verified != verified:
        hospital.is_verified = verified
        hospital.save(update_fields=['is_verified', 'updated_at'])
        logger.info(
            "Hospital %s %s by admin %s",
            hospital.pk, 'verified' if verified else 'unverified', actor.pk
        )
    return hospital


def verify_hospital(actor, hospital_id):
    """Idempotent: verifying an already verified hospital is a no-op"""
    return _set_verified(actor, hospital_id, True)


def revoke_hospital(actor, hospital_id):
    return _set_verified(actor, hospital_id, False)


def require_verified(hospital):
    """
    Gate for hospital operations that need admin approval. Checked on
    every call against the stored flag.
    """
    if not hospital.is_verified:
        raise AuthorizationError("Hospital not verified yet")
