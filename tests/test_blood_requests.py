from datetime import date

import pytest

from hospitals.lifecycle import create_blood_request, match_donors, record_response
from hospitals.models import BloodRequest, DonorNotification, DonorResponse
from raktsetu.exceptions import InvalidState
from .utils import auth_client

pytestmark = pytest.mark.django_db

REQUEST_BODY = {
    'bloodType': 'O+',
    'contactPerson': 'Dr. Gurung',
    'contactNumber': '9801234567',
    'urgent': True,
}


@pytest.fixture
def matched_request(hospital, make_donor, django_capture_on_commit_callbacks):
    """Pending O+ request with two notified donors"""
    first = make_donor(blood_group='O+')
    second = make_donor(blood_group='O+')
    with django_capture_on_commit_callbacks(execute=True):
        blood_request = create_blood_request(hospital, REQUEST_BODY)
    return blood_request, first, second


def respond(donor, blood_request, response):
    return auth_client(donor.user).post(
        f'/api/donor/blood-requests/{blood_request.pk}/respond',
        {'response': response},
        format='json',
    )


class TestCreate:
    def test_create_pending_request(self, hospital, hospital_client):
        response = hospital_client.post('/api/hospital/blood-requests', REQUEST_BODY, format='json')

        assert response.status_code == 201
        assert response.data['status'] == 'pending'
        assert response.data['hospitalId'] == hospital.pk
        assert response.data['urgent'] is True
        assert response.data['acceptedBy'] is None
        hospital.refresh_from_db()
        assert hospital.requests_made == 1

    def test_invalid_fields_reported_together(self, hospital_client):
        response = hospital_client.post(
            '/api/hospital/blood-requests',
            {'bloodType': 'Z+', 'contactNumber': '98'},
            format='json',
        )

        assert response.status_code == 400
        assert set(response.data['errors']) >= {'bloodType', 'contactPerson', 'contactNumber'}
        assert not BloodRequest.objects.exists()

    def test_urgent_defaults_to_false(self, hospital_client):
        body = dict(REQUEST_BODY)
        del body['urgent']
        response = hospital_client.post('/api/hospital/blood-requests', body, format='json')
        assert response.data['urgent'] is False


class TestMatching:
    def test_only_available_same_group_donors_notified(
        self, hospital_client, make_donor, django_capture_on_commit_callbacks
    ):
        match = make_donor(blood_group='O+')
        busy = make_donor(blood_group='O+', is_available=False)
        other = make_donor(blood_group='A+')

        with django_capture_on_commit_callbacks(execute=True):
            response = hospital_client.post('/api/hospital/blood-requests', REQUEST_BODY, format='json')

        request_id = response.data['id']
        notified = set(DonorNotification.objects.filter(blood_request_id=request_id).values_list('donor_id', flat=True))
        assert notified == {match.pk}

        listed = auth_client(match.user).get('/api/donor/blood-requests').data
        assert [r['id'] for r in listed] == [request_id]
        assert listed[0]['hospitalName']
        assert auth_client(busy.user).get('/api/donor/blood-requests').data == []
        assert auth_client(other.user).get('/api/donor/blood-requests').data == []

    def test_rematching_skips_notified_donors(self, matched_request, make_donor):
        blood_request, _, _ = matched_request
        make_donor(blood_group='O+')

        assert match_donors(blood_request) == 1
        assert match_donors(blood_request) == 0
        assert blood_request.notifications.count() == 3

    def test_admin_notify_endpoint(self, admin_client, matched_request, make_donor):
        blood_request, _, _ = matched_request
        make_donor(blood_group='O+')

        response = admin_client.post(f'/api/admin/blood-requests/{blood_request.pk}/notify')

        assert response.status_code == 200
        assert response.data['notifiedCount'] == 1
        assert response.data['totalNotified'] == 3


class TestRespond:
    def test_accept_claims_request(self, matched_request):
        blood_request, first, _ = matched_request

        response = respond(first, blood_request, 'accepted')

        assert response.status_code == 200
        assert response.data['bloodRequest']['status'] == 'accepted'
        assert response.data['bloodRequest']['acceptedBy'] == first.pk
        assert response.data['bloodRequest']['acceptedDonor']['id'] == first.pk

    def test_second_accept_loses(self, matched_request):
        blood_request, first, second = matched_request
        respond(first, blood_request, 'accepted')

        response = respond(second, blood_request, 'accepted')

        assert response.status_code == 409
        assert response.data['code'] == 'invalid_state'
        blood_request.refresh_from_db()
        assert blood_request.accepted_by_id == first.pk
        assert DonorResponse.objects.filter(blood_request=blood_request).count() == 1

    def test_reject_keeps_request_pending(self, matched_request):
        blood_request, first, second = matched_request

        response = respond(first, blood_request, 'rejected')
        assert response.data['bloodRequest']['status'] == 'pending'

        response = respond(second, blood_request, 'accepted')
        assert response.data['bloodRequest']['status'] == 'accepted'
        assert [r['response'] for r in response.data['bloodRequest']['responses']] == ['rejected', 'accepted']

    def test_duplicate_response(self, matched_request):
        blood_request, first, _ = matched_request
        respond(first, blood_request, 'rejected')

        response = respond(first, blood_request, 'rejected')

        assert response.status_code == 409
        assert response.data['code'] == 'conflict'

    def test_donor_not_notified(self, matched_request, make_donor):
        blood_request, _, _ = matched_request
        outsider = make_donor(blood_group='A+')

        response = respond(outsider, blood_request, 'accepted')
        assert response.status_code == 403

    def test_unknown_request(self, donor):
        response = auth_client(donor.user).post(
            '/api/donor/blood-requests/9999/respond', {'response': 'accepted'}, format='json'
        )
        assert response.status_code == 404

    def test_invalid_response_value(self, matched_request):
        blood_request, first, _ = matched_request

        response = respond(first, blood_request, 'maybe')

        assert response.status_code == 400
        assert 'response' in response.data['errors']

    def test_accepted_request_leaves_donor_listing(self, matched_request):
        blood_request, first, second = matched_request
        respond(first, blood_request, 'accepted')

        assert auth_client(second.user).get('/api/donor/blood-requests').data == []

    def test_record_response_requires_pending(self, matched_request):
        blood_request, first, second = matched_request
        record_response(blood_request.pk, first, DonorResponse.ACCEPTED)

        with pytest.raises(InvalidState):
            record_response(blood_request.pk, second, DonorResponse.ACCEPTED)

        assert not DonorResponse.objects.filter(donor=second).exists()
        blood_request.refresh_from_db()
        assert blood_request.status == BloodRequest.ACCEPTED
        assert blood_request.accepted_by_id == first.pk


class TestStatusUpdate:
    def test_complete_updates_counters(self, hospital, hospital_client, matched_request):
        blood_request, first, _ = matched_request
        respond(first, blood_request, 'accepted')

        response = hospital_client.patch(
            f'/api/hospital/blood-requests/{blood_request.pk}', {'status': 'completed'}, format='json'
        )

        assert response.status_code == 200
        assert response.data['status'] == 'completed'
        hospital.refresh_from_db()
        first.refresh_from_db()
        assert hospital.requests_completed == 1
        assert first.donation_count == 1
        assert first.last_donation_date == date.today()

    def test_repeated_complete_counts_once(self, hospital, hospital_client, matched_request):
        blood_request, _, _ = matched_request
        url = f'/api/hospital/blood-requests/{blood_request.pk}'

        hospital_client.patch(url, {'status': 'completed'}, format='json')
        hospital_client.patch(url, {'status': 'completed'}, format='json')

        hospital.refresh_from_db()
        assert hospital.requests_completed == 1

    def test_cancel(self, hospital_client, matched_request):
        blood_request, _, _ = matched_request

        response = hospital_client.patch(
            f'/api/hospital/blood-requests/{blood_request.pk}', {'status': 'cancelled'}, format='json'
        )
        assert response.data['status'] == 'cancelled'

    def test_other_hospital_forbidden(self, make_hospital, matched_request):
        blood_request, _, _ = matched_request
        stranger = auth_client(make_hospital(is_verified=True).user)
        url = f'/api/hospital/blood-requests/{blood_request.pk}'

        assert stranger.patch(url, {'status': 'cancelled'}, format='json').status_code == 403
        assert stranger.get(url).status_code == 403
        blood_request.refresh_from_db()
        assert blood_request.status == BloodRequest.PENDING

    def test_invalid_status(self, hospital_client, matched_request):
        blood_request, _, _ = matched_request

        response = hospital_client.patch(
            f'/api/hospital/blood-requests/{blood_request.pk}', {'status': 'done'}, format='json'
        )
        assert response.status_code == 400

    def test_unknown_request(self, hospital_client):
        response = hospital_client.patch(
            '/api/hospital/blood-requests/9999', {'status': 'completed'}, format='json'
        )
        assert response.status_code == 404


class TestHospitalListing:
    def test_list_and_detail(self, hospital_client, matched_request):
        blood_request, first, _ = matched_request
        respond(first, blood_request, 'accepted')

        listed = hospital_client.get('/api/hospital/blood-requests').data
        assert [r['id'] for r in listed] == [blood_request.pk]

        detail = hospital_client.get(f'/api/hospital/blood-requests/{blood_request.pk}').data
        assert detail['notifiedCount'] == 2
        assert detail['responses'][0]['donorId'] == first.pk

    def test_admin_lists_by_status(self, admin_client, matched_request):
        blood_request, first, _ = matched_request
        respond(first, blood_request, 'accepted')

        assert len(admin_client.get('/api/admin/blood-requests').data) == 1
        assert len(admin_client.get('/api/admin/blood-requests?status=accepted').data) == 1
        assert admin_client.get('/api/admin/blood-requests?status=pending').data == []
