from rest_framework.test import APIClient

from accounts.tokens import issue_token

PASSWORD = 'secret123'


def auth_client(user):
    """APIClient carrying a bearer token for the given principal"""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(user)}')
    return client
