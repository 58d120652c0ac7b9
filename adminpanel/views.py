# adminpanel/views.py
from rest_framework.decorators import api_view
from rest_framework.response import Response

from accounts.decorators import role_required
from accounts.models import CustomUser
from donors.models import DonorProfile
from donors.serializers import DonorSerializer
from hospitals.lifecycle import match_donors
from hospitals.models import BloodRequest, HospitalProfile
from hospitals.serializers import BloodRequestSerializer, HospitalSerializer
from hospitals.verification import revoke_hospital, verify_hospital
from raktsetu.exceptions import NotFound


# ============================================
# HOSPITALS
# ============================================
@api_view(['GET'])
@role_required(CustomUser.ADMIN)
def unverified_hospitals(request):
    hospitals = HospitalProfile.objects.filter(is_verified=False).select_related('user')
    return Response(HospitalSerializer(hospitals, many=True).data)


@api_view(['GET'])
@role_required(CustomUser.ADMIN)
def all_hospitals(request):
    hospitals = HospitalProfile.objects.select_related('user')
    return Response(HospitalSerializer(hospitals, many=True).data)


@api_view(['POST'])
@role_required(CustomUser.ADMIN)
def verify_hospital_view(request, hospital_id):
    hospital = verify_hospital(request.user, hospital_id)
    return Response({
        "message": "Hospital verified successfully",
        "hospital": HospitalSerializer(hospital).data,
    })


@api_view(['POST'])
@role_required(CustomUser.ADMIN)
def revoke_hospital_view(request, hospital_id):
    hospital = revoke_hospital(request.user, hospital_id)
    return Response({
        "message": "Hospital verification revoked",
        "hospital": HospitalSerializer(hospital).data,
    })


# ============================================
# DONORS
# ============================================
@api_view(['GET'])
@role_required(CustomUser.ADMIN)
def all_donors(request):
    donors = DonorProfile.objects.select_related('user')

    blood_group = request.query_params.get('bloodGroup')
    city = request.query_params.get('city')
    if blood_group and blood_group != 'all':
        donors = donors.filter(blood_group=blood_group)
    if city:
        donors = donors.filter(city__iexact=city)

    return Response(DonorSerializer(donors, many=True).data)


# ============================================
# BLOOD REQUESTS
# ============================================
@api_view(['GET'])
@role_required(CustomUser.ADMIN)
def all_blood_requests(request):
    blood_requests = BloodRequest.objects.select_related(
        'hospital__user', 'accepted_by__user'
    ).order_by('-created_at')

    status_filter = request.query_params.get('status')
    if status_filter and status_filter != 'all':
        blood_requests = blood_requests.filter(status=status_filter)

    return Response(BloodRequestSerializer(blood_requests, many=True).data)


@api_view(['POST'])
@role_required(CustomUser.ADMIN)
def notify_donors(request, request_id):
    """Re-run donor matching for a pending request"""
    blood_request = BloodRequest.objects.filter(pk=request_id).first()
    if blood_request is None:
        raise NotFound("Blood request not found")

    notified = 0
    if blood_request.status == BloodRequest.PENDING:
        notified = match_donors(blood_request)

    return Response({
        "message": f"{notified} donor(s) newly notified",
        "notifiedCount": notified,
        "totalNotified": blood_request.notifications.count(),
    })
