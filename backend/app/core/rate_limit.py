"""Request rate limiting for the login endpoint."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.core.config import settings

LOGIN_RATE_LIMIT = "10/minute"

_FORWARDING_HEADERS = ("X-Forwarded-For", "X-Real-IP")


def client_address(request: Request) -> str:
    """Key requests by client address.

    Forwarding headers are honoured only when BEHIND_PROXY is set, since a
    directly exposed server would otherwise let callers pick their own key.
    """
    if settings.BEHIND_PROXY:
        for header in _FORWARDING_HEADERS:
            value = request.headers.get(header)
            if value:
                return value.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(key_func=client_address)
