# accounts/serializers.py
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework import serializers

from donors.models import BLOOD_TYPES, DonorProfile, phone_validator
from hospitals.models import HospitalProfile
from raktsetu.exceptions import Conflict

User = get_user_model()
logger = logging.getLogger(__name__)


class AdminSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source='pk', read_only=True)
    role = serializers.CharField(source='user_type', read_only=True)
    isVerified = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'isVerified', 'createdAt']

    def get_isVerified(self, obj):
        return True


# -----------------------------
# REGISTRATION
# -----------------------------
class PrincipalRegisterSerializer(serializers.Serializer):
    """
    Base for the three registration forms. Field errors are collected
    together so the caller can fix everything in one round trip.
    """
    user_type = None
    duplicate_message = 'Email already registered'

    name = serializers.CharField(max_length=200)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6, trim_whitespace=False)

    def validate_email(self, value):
        return value.strip().lower()

    def create_profile(self, user, validated_data):
        pass

    def check_can_register(self, email):
        if User.objects.find_by_email(self.user_type, email):
            raise Conflict(self.duplicate_message)

    def create(self, validated_data):
        email = validated_data.pop('email')
        password = validated_data.pop('password')
        name = validated_data.pop('name')

        try:
            with transaction.atomic():
                self.check_can_register(email)
                user = User.objects.create_principal(self.user_type, email, password, name=name)
                self.create_profile(user, validated_data)
        except IntegrityError:
            raise Conflict(self.duplicate_message)

        logger.info("Registered %s principal %s", self.user_type, user.pk)
        return user


class DonorRegisterSerializer(PrincipalRegisterSerializer):
    user_type = User.DONOR

    age = serializers.IntegerField(
        min_value=18, max_value=65,
        error_messages={
            'min_value': 'Age must be between 18 and 65 years',
            'max_value': 'Age must be between 18 and 65 years',
        }
    )
    gender = serializers.ChoiceField(
        choices=DonorProfile.GENDER_CHOICES,
        error_messages={'invalid_choice': 'Invalid gender value'}
    )
    bloodGroup = serializers.ChoiceField(source='blood_group', choices=BLOOD_TYPES)
    contactNumber = serializers.CharField(source='contact_number', validators=[phone_validator])
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    isAvailable = serializers.BooleanField(source='is_available', required=False, default=True)
    lastDonation = serializers.DateField(source='last_donation_date', required=False, allow_null=True)

    def create_profile(self, user, validated_data):
        return DonorProfile.objects.create(user=user, **validated_data)


class HospitalRegisterSerializer(PrincipalRegisterSerializer):
    user_type = User.HOSPITAL

    phone = serializers.CharField(max_length=15)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    contactPerson = serializers.CharField(source='contact_person', max_length=200)
    licenseNumber = serializers.CharField(source='license_number', max_length=100)

    def create_profile(self, user, validated_data):
        # Registration never grants verification, whatever the payload says.
        return HospitalProfile.objects.create(user=user, is_verified=False, **validated_data)


class AdminRegisterSerializer(PrincipalRegisterSerializer):
    user_type = User.ADMIN
    duplicate_message = 'Admin already exists'

    def check_can_register(self, email):
        # Runs inside the registration transaction; the single_admin index backs it up.
        if User.objects.filter(user_type=User.ADMIN).exists():
            raise Conflict(self.duplicate_message)


REGISTER_SERIALIZERS = {
    User.DONOR: DonorRegisterSerializer,
    User.HOSPITAL: HospitalRegisterSerializer,
    User.ADMIN: AdminRegisterSerializer,
}


# -----------------------------
# LOGIN / PASSWORD RESET
# -----------------------------
class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class PasswordResetSerializer(serializers.Serializer):
    email = serializers.EmailField()
    newPassword = serializers.CharField(min_length=6, trim_whitespace=False)
