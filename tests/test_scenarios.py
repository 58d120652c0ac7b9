import pytest

from .utils import auth_client

pytestmark = pytest.mark.django_db

O_NEG_REQUEST = {
    'bloodType': 'O-',
    'contactPerson': 'Jane',
    'contactNumber': '9876543210',
    'urgent': True,
}


@pytest.fixture
def registered_hospital(api_client):
    response = api_client.post('/api/auth/register/hospital', {
        'name': 'Bir Hospital',
        'email': 'bir@example.com',
        'password': 'secret123',
        'phone': '014221119',
        'city': 'Kathmandu',
        'state': 'Bagmati',
        'contactPerson': 'Jane',
        'licenseNumber': 'BIR-001',
    }, format='json')
    assert response.status_code == 201
    return response.data


def test_hospital_to_donor_flow(
    api_client, admin_client, registered_hospital, make_donor, django_capture_on_commit_callbacks
):
    hospital_id = registered_hospital['hospital']['id']
    assert registered_hospital['hospital']['isVerified'] is False

    login = api_client.post(
        '/api/auth/login/hospital', {'email': 'bir@example.com', 'password': 'secret123'}, format='json'
    )
    assert login.status_code == 200
    assert login.data['pendingVerification'] is True

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")
    blocked = api_client.post('/api/hospital/blood-requests', O_NEG_REQUEST, format='json')
    assert blocked.status_code == 403

    assert admin_client.post(f'/api/admin/verify-hospital/{hospital_id}').status_code == 200

    first = make_donor(blood_group='O-')
    second = make_donor(blood_group='O-')
    with django_capture_on_commit_callbacks(execute=True):
        created = api_client.post('/api/hospital/blood-requests', O_NEG_REQUEST, format='json')
    assert created.status_code == 201
    assert created.data['status'] == 'pending'
    request_id = created.data['id']

    visible = auth_client(first.user).get('/api/donor/blood-requests').data
    assert [r['id'] for r in visible] == [request_id]

    accepted = auth_client(first.user).post(
        f'/api/donor/blood-requests/{request_id}/respond', {'response': 'accepted'}, format='json'
    )
    assert accepted.data['bloodRequest']['status'] == 'accepted'
    assert accepted.data['bloodRequest']['acceptedBy'] == first.pk

    late = auth_client(second.user).post(
        f'/api/donor/blood-requests/{request_id}/respond', {'response': 'accepted'}, format='json'
    )
    assert late.status_code == 409
    assert late.data['code'] == 'invalid_state'


def test_create_then_fetch_returns_same_fields(hospital_client):
    created = hospital_client.post('/api/hospital/blood-requests', O_NEG_REQUEST, format='json')

    fetched = hospital_client.get(f"/api/hospital/blood-requests/{created.data['id']}")

    assert fetched.status_code == 200
    for field in ('bloodType', 'contactPerson', 'contactNumber', 'urgent'):
        assert fetched.data[field] == O_NEG_REQUEST[field]


def test_short_contact_number_named_in_errors(hospital_client):
    body = dict(O_NEG_REQUEST, contactNumber='12345')

    response = hospital_client.post('/api/hospital/blood-requests', body, format='json')

    assert response.status_code == 400
    assert list(response.data['errors']) == ['contactNumber']


def test_revoked_hospital_cannot_create(admin_client, hospital, hospital_client):
    admin_client.post(f'/api/admin/revoke-hospital/{hospital.pk}')

    response = hospital_client.post('/api/hospital/blood-requests', O_NEG_REQUEST, format='json')
    assert response.status_code == 403
