"""Identity providers for the CLI.

``StaticIdentityProvider`` is built from the ``--user/--verified/--admin``
options.  ``SessionFileIdentityProvider`` reads a session document of the
shape ``{"userId", "emailVerified", "isAdmin"}``, the way a web front end
would hand over its session lookup behind the same port.
"""

from __future__ import annotations

import json
from pathlib import Path

from storefront.application.ports import IdentityProvider
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.identity import Identity


class StaticIdentityProvider(IdentityProvider):

    def __init__(self, identity: Identity | None) -> None:
        self._identity = identity

    def current(self) -> Identity | None:
        return self._identity


class SessionFileIdentityProvider(IdentityProvider):
    """Reads the session file on every call, so a sign-out takes effect at once."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def current(self) -> Identity | None:
        if not self._path.exists():
            return None
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8") or "null")
        except ValueError as exc:
            raise ValidationError(f"Session file {self._path} is not valid JSON") from exc
        return Identity.from_payload(payload)
