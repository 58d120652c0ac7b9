# accounts/backends.py
from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model

User = get_user_model()


class RoleEmailBackend(ModelBackend):
    """
    Authenticates a principal by (role, email, password).
    Email comparison is case-insensitive.
    """
    def authenticate(self, request, username=None, password=None, user_type=None, **kwargs):
        email = kwargs.get('email', username)
        if email is None or password is None or user_type is None:
            return None

        user = User.objects.find_by_email(user_type, email)
        if user is None:
            # Run the default password hasher once to reduce timing attack
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
