# hospitals/serializers.py
from rest_framework import serializers

from donors.models import BLOOD_TYPES, phone_validator
from .models import BloodInventory, BloodRequest, DonorResponse, HospitalProfile


class BloodInventorySerializer(serializers.ModelSerializer):
    bloodGroup = serializers.ChoiceField(source='blood_group', choices=BLOOD_TYPES)
    units = serializers.IntegerField(min_value=0)

    class Meta:
        model = BloodInventory
        fields = ['bloodGroup', 'units']


class HospitalSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source='pk', read_only=True)
    name = serializers.CharField(source='user.name', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    contactPerson = serializers.CharField(source='contact_person', read_only=True)
    licenseNumber = serializers.CharField(source='license_number', read_only=True)
    isVerified = serializers.BooleanField(source='is_verified', read_only=True)
    requestsMade = serializers.IntegerField(source='requests_made', read_only=True)
    requestsCompleted = serializers.IntegerField(source='requests_completed', read_only=True)
    availableBloodGroups = BloodInventorySerializer(source='inventory', many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = HospitalProfile
        fields = [
            'id', 'name', 'email', 'phone', 'city', 'state',
            'contactPerson', 'licenseNumber', 'isVerified',
            'requestsMade', 'requestsCompleted', 'availableBloodGroups',
            'createdAt',
        ]


class HospitalUpdateSerializer(serializers.Serializer):
    """
    Profile edits. Password, email and the verification flag are never writable here.
    """
    name = serializers.CharField(max_length=200, required=False)
    phone = serializers.CharField(max_length=15, required=False)
    city = serializers.CharField(max_length=100, required=False)
    state = serializers.CharField(max_length=100, required=False)
    contactPerson = serializers.CharField(source='contact_person', max_length=200, required=False)
    licenseNumber = serializers.CharField(source='license_number', max_length=100, required=False)

    def update(self, instance, validated_data):
        name = validated_data.pop('name', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()

        if name is not None:
            instance.user.name = name
            instance.user.save(update_fields=['name'])
        return instance


class BloodRequestCreateSerializer(serializers.ModelSerializer):
    bloodType = serializers.ChoiceField(source='blood_type', choices=BLOOD_TYPES)
    contactPerson = serializers.CharField(source='contact_person', max_length=200)
    contactNumber = serializers.CharField(source='contact_number', validators=[phone_validator])
    urgent = serializers.BooleanField(required=False, default=False)

    class Meta:
        model = BloodRequest
        fields = ['bloodType', 'contactPerson', 'contactNumber', 'urgent']


class DonorResponseSerializer(serializers.ModelSerializer):
    donorId = serializers.IntegerField(source='donor_id', read_only=True)
    donorName = serializers.CharField(source='donor.user.name', read_only=True)
    respondedAt = serializers.DateTimeField(source='responded_at', read_only=True)

    class Meta:
        model = DonorResponse
        fields = ['donorId', 'donorName', 'response', 'respondedAt']


class BloodRequestSerializer(serializers.ModelSerializer):
    """
    Full view of a request for its hospital and the admin
    """
    id = serializers.IntegerField(source='pk', read_only=True)
    hospitalId = serializers.IntegerField(source='hospital_id', read_only=True)
    hospitalName = serializers.CharField(source='hospital.user.name', read_only=True)
    bloodType = serializers.CharField(source='blood_type', read_only=True)
    contactPerson = serializers.CharField(source='contact_person', read_only=True)
    contactNumber = serializers.CharField(source='contact_number', read_only=True)
    acceptedBy = serializers.IntegerField(source='accepted_by_id', read_only=True)
    acceptedDonor = serializers.SerializerMethodField()
    notifiedCount = serializers.SerializerMethodField()
    responses = DonorResponseSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = BloodRequest
        fields = [
            'id', 'hospitalId', 'hospitalName', 'bloodType', 'contactPerson',
            'contactNumber', 'urgent', 'status', 'acceptedBy', 'acceptedDonor',
            'notifiedCount', 'responses', 'createdAt', 'updatedAt',
        ]

    def get_acceptedDonor(self, obj):
        donor = obj.accepted_by
        if donor is None:
            return None
        return {
            'id': donor.pk,
            'name': donor.user.name,
            'bloodGroup': donor.blood_group,
            'contactNumber': donor.contact_number,
        }

    def get_notifiedCount(self, obj):
        return obj.notifications.count()


class DonorBloodRequestSerializer(serializers.ModelSerializer):
    """
    What a notified donor sees: the request plus the hospital's identity
    """
    id = serializers.IntegerField(source='pk', read_only=True)
    bloodType = serializers.CharField(source='blood_type', read_only=True)
    contactPerson = serializers.CharField(source='contact_person', read_only=True)
    contactNumber = serializers.CharField(source='contact_number', read_only=True)
    hospitalId = serializers.IntegerField(source='hospital_id', read_only=True)
    hospitalName = serializers.CharField(source='hospital.user.name', read_only=True)
    hospitalEmail = serializers.EmailField(source='hospital.user.email', read_only=True)
    hospitalPhone = serializers.CharField(source='hospital.phone', read_only=True)
    hospitalCity = serializers.CharField(source='hospital.city', read_only=True)
    hospitalState = serializers.CharField(source='hospital.state', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = BloodRequest
        fields = [
            'id', 'bloodType', 'contactPerson', 'contactNumber', 'urgent',
            'status', 'hospitalId', 'hospitalName', 'hospitalEmail',
            'hospitalPhone', 'hospitalCity', 'hospitalState', 'createdAt',
        ]
