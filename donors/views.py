import logging

from rest_framework.decorators import api_view
from rest_framework.response import Response

from accounts.decorators import role_required
from accounts.models import CustomUser
from hospitals.lifecycle import list_for_donor, respond_to_request
from hospitals.serializers import BloodRequestSerializer, DonorBloodRequestSerializer
from raktsetu.exceptions import NotFound, ValidationError
from .serializers import AvailabilitySerializer, DonorSerializer, DonorUpdateSerializer, LastDonationSerializer

logger = logging.getLogger(__name__)


def _donor(request):
    donor = getattr(request.user, 'donor_profile', None)
    if donor is None:
        raise NotFound("Donor not found")
    return donor


def _apply(serializer_class, donor, data, partial=False):
    serializer = serializer_class(donor, data=data, partial=partial)
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)
    return serializer.save()


# ============================================
# PROFILE
# ============================================
@api_view(['GET', 'PATCH'])
@role_required(CustomUser.DONOR)
def donor_profile(request):
    donor = _donor(request)

    if request.method == 'PATCH':
        donor = _apply(DonorUpdateSerializer, donor, request.data, partial=True)
        logger.info("Donor %s updated profile", donor.pk)

    return Response(DonorSerializer(donor).data)


# ============================================
# AVAILABILITY / LAST DONATION
# ============================================
@api_view(['PATCH'])
@role_required(CustomUser.DONOR)
def update_availability(request):
    donor = _apply(AvailabilitySerializer, _donor(request), request.data)
    logger.info("Donor %s availability set to %s", donor.pk, donor.is_available)
    return Response({
        "message": "Availability updated successfully",
        "donor": DonorSerializer(donor).data,
    })


@api_view(['PATCH'])
@role_required(CustomUser.DONOR)
def update_last_donation(request):
    donor = _apply(LastDonationSerializer, _donor(request), request.data)
    return Response({
        "message": "Last donation date updated successfully",
        "donor": DonorSerializer(donor).data,
    })


# ============================================
# BLOOD REQUESTS
# ============================================
@api_view(['GET'])
@role_required(CustomUser.DONOR)
def donor_blood_requests(request):
    """Pending requests this donor was notified about, newest first"""
    requests = list_for_donor(_donor(request))
    return Response(DonorBloodRequestSerializer(requests, many=True).data)


@api_view(['POST'])
@role_required(CustomUser.DONOR)
def respond_blood_request(request, request_id):
    donor = _donor(request)
    blood_request = respond_to_request(donor, request_id, request.data.get('response'))

    return Response({
        "message": f"Response recorded: {request.data.get('response')}",
        "bloodRequest": BloodRequestSerializer(blood_request).data,
    })
