# hospitals/views.py
import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from accounts.decorators import role_required
from accounts.models import CustomUser
from donors.models import DonorProfile
from donors.serializers import DonorSerializer
from raktsetu.exceptions import AuthorizationError, NotFound, ValidationError
from .lifecycle import create_blood_request, list_for_hospital, update_request_status
from .models import BloodInventory, BloodRequest
from .serializers import (
    BloodInventorySerializer, BloodRequestSerializer, HospitalSerializer, HospitalUpdateSerializer,
)
from .verification import require_verified

logger = logging.getLogger(__name__)


def _hospital(request):
    hospital = getattr(request.user, 'hospital_profile', None)
    if hospital is None:
        raise NotFound("Hospital not found")
    return hospital


# ============================================
# PROFILE
# ============================================
@api_view(['GET', 'PATCH'])
@role_required(CustomUser.HOSPITAL)
def hospital_profile(request):
    hospital = _hospital(request)

    if request.method == 'PATCH':
        serializer = HospitalUpdateSerializer(hospital, data=request.data, partial=True)
        if not serializer.is_valid():
            raise ValidationError(serializer.errors)
        hospital = serializer.save()
        logger.info("Hospital %s updated its profile", hospital.pk)

    return Response(HospitalSerializer(hospital).data)


# ============================================
# INVENTORY
# ============================================
@api_view(['PATCH'])
@role_required(CustomUser.HOSPITAL)
def update_inventory(request):
    hospital = _hospital(request)
    require_verified(hospital)

    serializer = BloodInventorySerializer(data=request.data)
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)

    BloodInventory.objects.update_or_create(
        hospital=hospital,
        blood_group=serializer.validated_data['blood_group'],
        defaults={'units': serializer.validated_data['units']},
    )
    logger.info(
        "Hospital %s inventory %s = %s",
        hospital.pk, serializer.validated_data['blood_group'], serializer.validated_data['units']
    )
    return Response({
        "message": "Inventory updated successfully",
        "hospital": HospitalSerializer(hospital).data,
    })


# ============================================
# DONOR SEARCH
# ============================================
@api_view(['GET'])
@role_required(CustomUser.HOSPITAL)
def search_donors(request):
    hospital = _hospital(request)
    require_verified(hospital)

    donors = DonorProfile.objects.filter(is_available=True).select_related('user')

    blood_group = request.query_params.get('bloodGroup')
    city = request.query_params.get('city')
    if blood_group:
        donors = donors.filter(blood_group=blood_group)
    if city:
        donors = donors.filter(city__iexact=city)

    return Response(DonorSerializer(donors, many=True).data)


# ============================================
# BLOOD REQUESTS
# ============================================
@api_view(['GET', 'POST'])
@role_required(CustomUser.HOSPITAL)
def blood_requests(request):
    hospital = _hospital(request)

    if request.method == 'POST':
        blood_request = create_blood_request(hospital, request.data)
        return Response(BloodRequestSerializer(blood_request).data, status=status.HTTP_201_CREATED)

    return Response(BloodRequestSerializer(list_for_hospital(hospital), many=True).data)


@api_view(['GET', 'PATCH'])
@role_required(CustomUser.HOSPITAL)
def blood_request_detail(request, request_id):
    hospital = _hospital(request)

    if request.method == 'PATCH':
        blood_request = update_request_status(hospital, request_id, request.data.get('status'))
        return Response(BloodRequestSerializer(blood_request).data)

    blood_request = BloodRequest.objects.filter(pk=request_id).first()
    if blood_request is None:
        raise NotFound("Blood request not found")
    if blood_request.hospital_id != hospital.pk:
        raise AuthorizationError("Not authorized to view this request")
    return Response(BloodRequestSerializer(blood_request).data)
