"""
Shared test utilities and factories.

Re-exports all factory functions for convenient imports:
    from app.testing import create_user, create_item, get_auth_headers
"""

from app.testing.factories import (
    DEFAULT_PASSWORD,
    create_group,
    create_item,
    create_user,
    get_auth_headers,
    get_auth_token,
    grant_item,
)

__all__ = [
    "DEFAULT_PASSWORD",
    "create_group",
    "create_item",
    "create_user",
    "get_auth_headers",
    "get_auth_token",
    "grant_item",
]
