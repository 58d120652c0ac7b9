# hospitals/models.py
from django.db import models
from django.conf import settings

from donors.models import BLOOD_TYPE_CHOICES, phone_validator


class HospitalProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='hospital_profile'
    )
    phone = models.CharField(max_length=15)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    contact_person = models.CharField(max_length=200)
    license_number = models.CharField(max_length=100)

    is_verified = models.BooleanField(default=False)
    requests_made = models.PositiveIntegerField(default=0)
    requests_completed = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.user.name

    class Meta:
        verbose_name = 'Hospital Profile'
        verbose_name_plural = 'Hospital Profiles'
        ordering = ['-created_at']


class BloodInventory(models.Model):
    hospital = models.ForeignKey(HospitalProfile, on_delete=models.CASCADE, related_name='inventory')
    blood_group = models.CharField(max_length=4, choices=BLOOD_TYPE_CHOICES)
    units = models.PositiveIntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.hospital} - {self.blood_group}: {self.units}"

    class Meta:
        ordering = ['blood_group']
        constraints = [
            models.UniqueConstraint(fields=['hospital', 'blood_group'], name='unique_inventory_group'),
        ]


class BloodRequest(models.Model):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (ACCEPTED, 'Accepted'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    hospital = models.ForeignKey(HospitalProfile, on_delete=models.CASCADE, related_name='blood_requests')
    blood_type = models.CharField(max_length=4, choices=BLOOD_TYPE_CHOICES)
    contact_person = models.CharField(max_length=200)
    contact_number = models.CharField(max_length=10, validators=[phone_validator])
    urgent = models.BooleanField(default=False)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=PENDING, db_index=True)

    notified_donors = models.ManyToManyField(
        'donors.DonorProfile',
        through='DonorNotification',
        related_name='notified_requests',
        blank=True
    )
    accepted_by = models.ForeignKey(
        'donors.DonorProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='accepted_requests'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.hospital} - {self.blood_type} ({self.status})"

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Blood Request'
        verbose_name_plural = 'Blood Requests'


class DonorNotification(models.Model):
    """Membership of a donor in a blood request's notified set"""
    donor = models.ForeignKey('donors.DonorProfile', on_delete=models.CASCADE, related_name='notifications')
    blood_request = models.ForeignKey(BloodRequest, on_delete=models.CASCADE, related_name='notifications')

    sent_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Notification → {self.donor} | Request #{self.blood_request_id}"

    class Meta:
        ordering = ['-sent_at']
        constraints = [
            models.UniqueConstraint(fields=['blood_request', 'donor'], name='unique_notification'),
        ]


class DonorResponse(models.Model):
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'

    RESPONSE_CHOICES = [
        (ACCEPTED, 'Accepted'),
        (REJECTED, 'Rejected'),
    ]

    donor = models.ForeignKey('donors.DonorProfile', on_delete=models.CASCADE, related_name='responses')
    blood_request = models.ForeignKey(BloodRequest, on_delete=models.CASCADE, related_name='responses')

    response = models.CharField(max_length=10, choices=RESPONSE_CHOICES)
    responded_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.donor} → {self.response}"

    class Meta:
        ordering = ['responded_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['blood_request', 'donor'], name='unique_donor_response'),
        ]
