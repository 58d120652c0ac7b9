from donors.models import DonorProfile


def eligible_donors(blood_request):
    """
    Donors who may be notified about a blood request.

    Criteria:
    - Donor is available
    - Donor blood group equals the requested blood type
    - Donor was not already notified about this request
    """
    return DonorProfile.objects.filter(
        is_available=True,
        blood_group=blood_request.blood_type,
        user__is_active=True,
    ).exclude(notifications__blood_request=blood_request)
