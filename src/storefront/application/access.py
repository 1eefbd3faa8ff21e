"""Identity checks shared by the use-case handlers."""

from __future__ import annotations

from storefront.application.ports import IdentityProvider
from storefront.domain.exceptions import AdminRequired, Unauthorized
from storefront.domain.model.identity import Identity


def authenticate(provider: IdentityProvider) -> Identity:
    identity = provider.current()
    if identity is None:
        raise Unauthorized()
    return identity


def require_admin(provider: IdentityProvider) -> Identity:
    identity = provider.current()
    if identity is None:
        raise Unauthorized("You must be signed in")
    if not identity.is_admin:
        raise AdminRequired()
    return identity


def is_admin(provider: IdentityProvider | None) -> bool:
    if provider is None:
        return False
    identity = provider.current()
    return identity is not None and identity.is_admin
