# donors/serializers.py
from rest_framework import serializers

from .models import BLOOD_TYPES, DonorProfile, phone_validator


class DonorSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source='pk', read_only=True)
    name = serializers.CharField(source='user.name', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    bloodGroup = serializers.CharField(source='blood_group', read_only=True)
    contactNumber = serializers.CharField(source='contact_number', read_only=True)
    isAvailable = serializers.BooleanField(source='is_available', read_only=True)
    lastDonation = serializers.DateField(source='last_donation_date', read_only=True)
    donations = serializers.IntegerField(source='donation_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = DonorProfile
        fields = [
            'id', 'name', 'email', 'age', 'gender', 'bloodGroup',
            'contactNumber', 'city', 'state', 'isAvailable',
            'lastDonation', 'donations', 'createdAt',
        ]


class DonorFieldsSerializer(serializers.Serializer):
    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance


class DonorUpdateSerializer(DonorFieldsSerializer):
    """
    Self-service profile edits. Unknown keys (password, email, counters) are ignored.
    """
    name = serializers.CharField(max_length=200, required=False)
    age = serializers.IntegerField(
        min_value=18, max_value=65, required=False,
        error_messages={
            'min_value': 'Age must be between 18 and 65 years',
            'max_value': 'Age must be between 18 and 65 years',
        }
    )
    gender = serializers.ChoiceField(choices=DonorProfile.GENDER_CHOICES, required=False)
    bloodGroup = serializers.ChoiceField(source='blood_group', choices=BLOOD_TYPES, required=False)
    contactNumber = serializers.CharField(source='contact_number', validators=[phone_validator], required=False)
    city = serializers.CharField(max_length=100, required=False)
    state = serializers.CharField(max_length=100, required=False)
    isAvailable = serializers.BooleanField(source='is_available', required=False)
    lastDonation = serializers.DateField(source='last_donation_date', required=False, allow_null=True)

    def update(self, instance, validated_data):
        name = validated_data.pop('name', None)
        instance = super().update(instance, validated_data)

        if name is not None:
            instance.user.name = name
            instance.user.save(update_fields=['name'])
        return instance


class AvailabilitySerializer(DonorFieldsSerializer):
    isAvailable = serializers.BooleanField(source='is_available')


class LastDonationSerializer(DonorFieldsSerializer):
    lastDonation = serializers.DateField(source='last_donation_date')
