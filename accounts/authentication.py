# accounts/authentication.py
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed

from accounts.tokens import InvalidToken, principal_from_token

User = get_user_model()


class PrincipalJWTAuthentication(JWTAuthentication):
    """
    Bearer authentication resolving the principal by (role, id) from the token.

    request.user is the principal, request.auth the validated token.
    """
    def get_user(self, validated_token):
        try:
            principal = principal_from_token(validated_token)
        except InvalidToken as exc:
            raise AuthenticationFailed(str(exc), code='token_not_valid')

        # A role claim that disagrees with the stored principal finds nobody.
        user = User.objects.find_by_id(principal.role, principal.principal_id)
        if user is None:
            raise AuthenticationFailed('User not found', code='user_not_found')
        if not user.is_active:
            raise AuthenticationFailed('User is inactive', code='user_inactive')
        return user


class PublicJWTAuthentication(PrincipalJWTAuthentication):
    """
    For endpoints open to anonymous callers: a stale or invalid bearer token
    leaves the request anonymous instead of failing it.
    """
    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except AuthenticationFailed:
            return None
