# accounts/tokens.py
"""
Bearer token issue/verify on top of simplejwt access tokens.
"""
from collections import namedtuple

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

ROLE_CLAIM = 'role'

TokenPrincipal = namedtuple('TokenPrincipal', ['principal_id', 'role'])


class InvalidToken(Exception):
    pass


def issue_token(user):
    """
    Signed access token carrying the principal id and role
    """
    token = AccessToken.for_user(user)
    token[ROLE_CLAIM] = user.user_type
    return str(token)


def verify_token(raw_token):
    """
    Validate signature, expiry and claims. Returns TokenPrincipal or raises InvalidToken.
    """
    try:
        token = AccessToken(raw_token)
    except TokenError as exc:
        raise InvalidToken(str(exc)) from exc
    return principal_from_token(token)


def principal_from_token(token):
    try:
        principal_id = token[api_settings.USER_ID_CLAIM]
        role = token[ROLE_CLAIM]
    except KeyError as exc:
        raise InvalidToken(f"Token has no {exc.args[0]} claim") from exc

    # The id claim may arrive as a string.
    try:
        principal_id = int(principal_id)
    except (TypeError, ValueError) as exc:
        raise InvalidToken("Malformed principal id") from exc
    return TokenPrincipal(principal_id=principal_id, role=role)
