import pytest

from hospitals.models import HospitalProfile
from hospitals.verification import revoke_hospital, verify_hospital
from raktsetu.exceptions import AuthorizationError, NotFound
from .utils import auth_client

pytestmark = pytest.mark.django_db


class TestVerificationWorkflow:
    def test_admin_verifies_hospital(self, admin_client, make_hospital):
        hospital = make_hospital()

        response = admin_client.post(f'/api/admin/verify-hospital/{hospital.pk}')

        assert response.status_code == 200
        assert response.data['hospital']['isVerified'] is True
        hospital.refresh_from_db()
        assert hospital.is_verified

    def test_verify_is_idempotent(self, admin_user, make_hospital):
        hospital = make_hospital()

        verify_hospital(admin_user, hospital.pk)
        again = verify_hospital(admin_user, hospital.pk)

        assert again.is_verified
        assert HospitalProfile.objects.filter(is_verified=True).count() == 1

    def test_unknown_hospital(self, admin_client):
        response = admin_client.post('/api/admin/verify-hospital/9999')
        assert response.status_code == 404

    def test_non_admin_actor_rejected(self, donor, make_hospital):
        hospital = make_hospital()

        with pytest.raises(AuthorizationError):
            verify_hospital(donor.user, hospital.pk)
        with pytest.raises(AuthorizationError):
            verify_hospital(None, hospital.pk)

    def test_revoke(self, admin_client, hospital):
        response = admin_client.post(f'/api/admin/revoke-hospital/{hospital.pk}')

        assert response.status_code == 200
        assert response.data['hospital']['isVerified'] is False

    def test_revoke_unknown(self, admin_user):
        with pytest.raises(NotFound):
            revoke_hospital(admin_user, 9999)

    def test_revoked_hospital_loses_access(self, admin_user, hospital, hospital_client):
        revoke_hospital(admin_user, hospital.pk)

        response = hospital_client.get('/api/hospital/search-donors')
        assert response.status_code == 403
        assert response.data['message'] == 'Hospital not verified yet'

    def test_unverified_listing(self, admin_client, make_hospital):
        pending = make_hospital()
        make_hospital(is_verified=True)

        response = admin_client.get('/api/admin/unverified-hospitals')

        assert response.status_code == 200
        assert [h['id'] for h in response.data] == [pending.pk]
        assert len(admin_client.get('/api/admin/hospitals').data) == 2


class TestRoleGates:
    def test_donor_token_on_admin_route(self, donor_client):
        response = donor_client.get('/api/admin/unverified-hospitals')

        assert response.status_code == 403
        assert response.data['message'] == 'Access denied. Admin only.'

    def test_hospital_token_on_donor_route(self, hospital_client):
        response = hospital_client.get('/api/donor/blood-requests')
        assert response.status_code == 403

    def test_admin_token_on_hospital_route(self, admin_client):
        response = admin_client.get('/api/hospital/profile')
        assert response.status_code == 403

    def test_anonymous_on_admin_route(self, api_client):
        response = api_client.get('/api/admin/hospitals')
        assert response.status_code == 401


class TestUnverifiedHospital:
    @pytest.fixture
    def pending_client(self, make_hospital):
        return auth_client(make_hospital().user)

    def test_cannot_create_request(self, pending_client):
        response = pending_client.post(
            '/api/hospital/blood-requests',
            {'bloodType': 'A+', 'contactPerson': 'Dr. K', 'contactNumber': '9800000001'},
            format='json',
        )
        assert response.status_code == 403

    def test_cannot_update_inventory(self, pending_client):
        response = pending_client.patch(
            '/api/hospital/inventory', {'bloodGroup': 'A+', 'units': 4}, format='json'
        )
        assert response.status_code == 403

    def test_cannot_search_donors(self, pending_client):
        response = pending_client.get('/api/hospital/search-donors')
        assert response.status_code == 403

    def test_can_read_profile(self, pending_client):
        response = pending_client.get('/api/hospital/profile')

        assert response.status_code == 200
        assert response.data['isVerified'] is False
