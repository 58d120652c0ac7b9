from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower


class PrincipalManager(BaseUserManager):
    """
    Creates principals keyed by (role, email) instead of username
    """
    use_in_migrations = True

    def create_principal(self, user_type, email, password, **extra_fields):
        if not email:
            raise ValueError("Email is required")
        user = self.model(
            user_type=user_type,
            email=self.normalize_email(email).lower(),
            **extra_fields
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        user_type = extra_fields.pop('user_type', CustomUser.DONOR)
        return self.create_principal(user_type, email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_principal(CustomUser.ADMIN, email, password, **extra_fields)

    def find_by_email(self, user_type, email):
        if not email:
            return None
        return self.filter(user_type=user_type, email__iexact=email.strip()).first()

    def find_by_id(self, user_type, pk):
        return self.filter(user_type=user_type, pk=pk).first()


class CustomUser(AbstractUser):
    DONOR = 'donor'
    HOSPITAL = 'hospital'
    ADMIN = 'admin'

    USER_TYPE_CHOICES = (
        (DONOR, 'Donor'),
        (HOSPITAL, 'Hospital'),
        (ADMIN, 'Admin'),
    )

    # Identity is (user_type, email); the same address may register once per role.
    username = None
    first_name = None
    last_name = None

    user_type = models.CharField(
        max_length=15,
        choices=USER_TYPE_CHOICES,
        default=DONOR
    )
    email = models.EmailField()
    name = models.CharField(max_length=200, blank=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = PrincipalManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                Lower('email'), 'user_type',
                name='unique_email_per_role',
            ),
            models.UniqueConstraint(
                fields=['user_type'],
                condition=Q(user_type='admin'),
                name='single_admin',
            ),
        ]

    def __str__(self):
        return f"{self.email} ({self.user_type})"

    @property
    def created_at(self):
        return self.date_joined


def principal_payload(user):
    """
    Return the role-specific record for a principal.

    Donor and hospital principals carry a profile row; the admin's payload
    is the user row itself.
    """
    if user.user_type == CustomUser.DONOR:
        return user.donor_profile
    if user.user_type == CustomUser.HOSPITAL:
        return user.hospital_profile
    if user.user_type == CustomUser.ADMIN:
        return user
    raise ValueError(f"Unknown principal role: {user.user_type}")
