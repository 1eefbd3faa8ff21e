"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

from sqlalchemy.engine import Engine

from storefront.application.notifications import QueuedReceiptNotifier
from storefront.application.ports import MailDispatcher
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.config import Settings
from storefront.infrastructure.mail.console import ConsoleMailDispatcher
from storefront.infrastructure.mail.resend_dispatcher import ResendMailDispatcher
from storefront.infrastructure.persistence.database import (
    create_schema,
    make_engine,
    make_session_factory,
)
from storefront.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def engine() -> Engine:
    return make_engine(settings().database_url)


def init_database() -> None:
    create_schema(engine())


def uow_factory() -> Callable[[], UnitOfWork]:
    session_factory = make_session_factory(engine())
    return lambda: SqlAlchemyUnitOfWork(session_factory)


def mail_dispatcher() -> MailDispatcher:
    if settings().mail_backend == "resend":
        return ResendMailDispatcher(settings().resend_api_key)
    return ConsoleMailDispatcher()


def receipt_notifier() -> QueuedReceiptNotifier:
    return QueuedReceiptNotifier(mail_dispatcher(), sender=settings().email_from)
