import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from donors.models import DonorProfile
from hospitals.models import HospitalProfile
from .utils import PASSWORD, auth_client

User = get_user_model()


@pytest.fixture(autouse=True)
def fast_hasher(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_donor(db):
    counter = {'n': 0}

    def _make(blood_group='O+', city='Kathmandu', is_available=True, **extra):
        counter['n'] += 1
        email = extra.pop('email', f"donor{counter['n']}@example.com")
        user = User.objects.create_principal(
            User.DONOR, email, PASSWORD, name=extra.pop('name', f"Donor {counter['n']}")
        )
        return DonorProfile.objects.create(
            user=user,
            age=extra.pop('age', 30),
            gender=extra.pop('gender', 'Male'),
            blood_group=blood_group,
            contact_number=extra.pop('contact_number', '9800000000'),
            city=city,
            state=extra.pop('state', 'Bagmati'),
            is_available=is_available,
            **extra
        )
    return _make


@pytest.fixture
def make_hospital(db):
    counter = {'n': 0}

    def _make(is_verified=False, **extra):
        counter['n'] += 1
        email = extra.pop('email', f"hospital{counter['n']}@example.com")
        user = User.objects.create_principal(
            User.HOSPITAL, email, PASSWORD, name=extra.pop('name', f"Hospital {counter['n']}")
        )
        return HospitalProfile.objects.create(
            user=user,
            phone='014000000',
            city=extra.pop('city', 'Kathmandu'),
            state='Bagmati',
            contact_person='Dr. Sharma',
            license_number=f"LIC-{counter['n']}",
            is_verified=is_verified,
            **extra
        )
    return _make


@pytest.fixture
def admin_user(db):
    return User.objects.create_principal(User.ADMIN, 'admin@example.com', PASSWORD, name='Admin')


@pytest.fixture
def admin_client(admin_user):
    return auth_client(admin_user)


@pytest.fixture
def hospital(make_hospital):
    return make_hospital(is_verified=True)


@pytest.fixture
def hospital_client(hospital):
    return auth_client(hospital.user)


@pytest.fixture
def donor(make_donor):
    return make_donor()


@pytest.fixture
def donor_client(donor):
    return auth_client(donor.user)
