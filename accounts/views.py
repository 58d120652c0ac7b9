import logging

from django.contrib.auth import authenticate, get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.http import Http404
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.authentication import PublicJWTAuthentication
from accounts.models import principal_payload
from accounts.serializers import (
    AdminSerializer, LoginSerializer, PasswordResetSerializer, REGISTER_SERIALIZERS,
)
from accounts.tokens import issue_token
from donors.serializers import DonorSerializer
from hospitals.serializers import HospitalSerializer
from raktsetu.exceptions import AuthenticationError, NotFound, ValidationError

User = get_user_model()
logger = logging.getLogger(__name__)

PENDING_VERIFICATION_MESSAGE = 'Your account is pending admin verification. Please wait for approval.'

PAYLOAD_SERIALIZERS = {
    User.DONOR: DonorSerializer,
    User.HOSPITAL: HospitalSerializer,
    User.ADMIN: AdminSerializer,
}


def serialize_principal(user):
    """
    Role-specific projection of a principal
    """
    try:
        payload = principal_payload(user)
    except ObjectDoesNotExist:
        raise NotFound(f"{user.user_type.capitalize()} profile not found")
    return PAYLOAD_SERIALIZERS[user.user_type](payload).data


def _check_role(role):
    if role not in REGISTER_SERIALIZERS:
        raise Http404(f"Unknown role: {role}")


def _validated(serializer):
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)
    return serializer.validated_data


# -----------------------------
# REGISTER API
# -----------------------------
@api_view(['POST'])
@authentication_classes([PublicJWTAuthentication])
@permission_classes([AllowAny])
def register(request, role):
    """
    Registers a donor, hospital or the single admin and returns a bearer token
    """
    _check_role(role)

    serializer = REGISTER_SERIALIZERS[role](data=request.data)
    _validated(serializer)
    user = serializer.save()

    body = {
        "message": "Registration successful",
        "token": issue_token(user),
        role: serialize_principal(user),
    }
    if role == User.HOSPITAL:
        body["message"] = "Hospital registration successful. Waiting for admin verification."

    return Response(body, status=status.HTTP_201_CREATED)


# -----------------------------
# LOGIN API
# -----------------------------
@api_view(['POST'])
@authentication_classes([PublicJWTAuthentication])
@permission_classes([AllowAny])
def login(request, role):
    """
    Hospital login is allowed before verification; the response says so.
    """
    _check_role(role)
    credentials = _validated(LoginSerializer(data=request.data))

    user = authenticate(
        request,
        email=credentials['email'],
        password=credentials['password'],
        user_type=role,
    )
    if user is None:
        logger.warning("Failed %s login for %s", role, credentials['email'])
        raise AuthenticationError("Invalid credentials")

    body = {
        "message": "Login successful",
        "token": issue_token(user),
        role: serialize_principal(user),
    }
    if role == User.HOSPITAL and not user.hospital_profile.is_verified:
        body["message"] = PENDING_VERIFICATION_MESSAGE
        body["pendingVerification"] = True

    logger.info("%s %s logged in", role.capitalize(), user.pk)
    return Response(body)


# -----------------------------
# RESET PASSWORD (HOSPITAL)
# -----------------------------
@api_view(['POST'])
@authentication_classes([PublicJWTAuthentication])
@permission_classes([AllowAny])
def reset_hospital_password(request):
    """
    Resets a hospital password by email alone.

    There is no proof of the old password or out-of-band confirmation.
    """
    data = _validated(PasswordResetSerializer(data=request.data))

    user = User.objects.find_by_email(User.HOSPITAL, data['email'])
    if user is None:
        raise NotFound("No hospital found with this email")

    user.set_password(data['newPassword'])
    user.save(update_fields=['password'])
    logger.warning("Password reset by email for hospital %s", user.pk)

    return Response({
        "message": "Password reset successful",
        "hospital": {
            "id": user.pk,
            "email": user.email,
            "name": user.name,
        }
    })


# -----------------------------
# PROFILE
# -----------------------------
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile(request):
    return Response(serialize_principal(request.user))
