from functools import wraps

from rest_framework.exceptions import NotAuthenticated

from raktsetu.exceptions import AuthorizationError


def role_required(required_role):
    """
    Role gate for API views. Sits under @api_view so request.user is the
    principal resolved by the bearer token.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            user = request.user

            if not user or not user.is_authenticated:
                raise NotAuthenticated("Authentication required")

            if user.user_type != required_role:
                raise AuthorizationError(f"Access denied. {required_role.capitalize()} only.")

            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator
