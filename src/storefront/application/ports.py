"""Ports for the collaborators the storefront does not own.

The identity provider answers "who is calling"; the mail dispatcher
delivers a rendered message.  Both are injected into the handlers so
nothing in the application layer reaches for a global session or an
SMTP client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.identity import Identity


class IdentityProvider(ABC):

    @abstractmethod
    def current(self) -> Identity | None:
        """Return the caller's identity, or None when nobody is signed in."""


@dataclass(frozen=True)
class MailMessage:
    to: str
    sender: str
    subject: str
    text: str
    html: str


class MailDispatcher(ABC):

    @abstractmethod
    def send(self, message: MailMessage) -> None:
        """Deliver *message*. Raises NotificationFailure on delivery errors."""
