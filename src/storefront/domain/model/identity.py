"""Who is calling, as supplied by the session/identity provider."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Identity:
    user_id: str
    email_verified: bool = False
    is_admin: bool = False

    @property
    def may_purchase(self) -> bool:
        # Admins bypass the verified-email gate.
        return self.email_verified or self.is_admin

    @staticmethod
    def from_payload(payload: Mapping[str, Any] | None) -> Identity | None:
        """Build from the session shape ``{userId, emailVerified, isAdmin}``.

        An empty payload or a missing ``userId`` means nobody is signed in.
        The two flags must be real JSON booleans.
        """
        if not payload:
            return None
        if not isinstance(payload, Mapping):
            raise ValidationError("Session must be an object")
        user_id = payload.get("userId")
        if not user_id:
            return None
        if not isinstance(user_id, str):
            raise ValidationError("Session userId must be a string")
        return Identity(
            user_id=user_id,
            email_verified=_flag(payload, "emailVerified"),
            is_admin=_flag(payload, "isAdmin"),
        )


def _flag(payload: Mapping[str, Any], key: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise ValidationError(f"Session {key} must be true or false, got {value!r}")
    return value
