"""SQLAlchemy implementation of the UnitOfWork.

One session per unit.  Storage errors never leak as SQLAlchemy types:
they leave the unit as PersistenceFailure, with the original chained.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from storefront.domain.exceptions import PersistenceFailure
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.sql_repositories import (
    SqlOrderRepository,
    SqlProductRepository,
    SqlStockLedger,
)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlProductRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        self.stock = SqlStockLedger(self._session)
        super().__enter__()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        try:
            super().__exit__(exc_type, exc_value, traceback)
        finally:
            self._session.close()
            self._session = None
        if isinstance(exc_value, SQLAlchemyError):
            raise PersistenceFailure(str(exc_value)) from exc_value

    def commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceFailure(str(exc)) from exc

    def rollback(self) -> None:
        try:
            self._session.rollback()
        except SQLAlchemyError as exc:
            raise PersistenceFailure(str(exc)) from exc
