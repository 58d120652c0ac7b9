from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator, RegexValidator


BLOOD_TYPE_CHOICES = [
    ('A+', 'A+'), ('A-', 'A-'),
    ('B+', 'B+'), ('B-', 'B-'),
    ('AB+', 'AB+'), ('AB-', 'AB-'),
    ('O+', 'O+'), ('O-', 'O-'),
]
BLOOD_TYPES = [value for value, _ in BLOOD_TYPE_CHOICES]

phone_validator = RegexValidator(r'^[0-9]{10}$', 'Must be a 10-digit number')


# ---------------------------
# Donor Profile
# ---------------------------
class DonorProfile(models.Model):
    GENDER_CHOICES = [
        ('Male', 'Male'),
        ('Female', 'Female'),
        ('Other', 'Other'),
    ]

    # Shares its primary key with the principal, so donor id == user id.
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='donor_profile'
    )

    age = models.PositiveIntegerField(
        validators=[MinValueValidator(18), MaxValueValidator(65)]
    )
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    blood_group = models.CharField(max_length=4, choices=BLOOD_TYPE_CHOICES, db_index=True)
    contact_number = models.CharField(max_length=15, validators=[phone_validator])
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)

    # Donation tracking
    is_available = models.BooleanField(default=True)
    last_donation_date = models.DateField(null=True, blank=True)
    donation_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user.name} ({self.blood_group})"

    class Meta:
        verbose_name = "Donor Profile"
        verbose_name_plural = "Donor Profiles"
        ordering = ['-created_at']
