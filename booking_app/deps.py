# booking_app/deps.py

from .errors import AuthorizationError
from .models import User


def require_role(user: User, *roles: str):
    if user.role not in roles:
        raise AuthorizationError()
