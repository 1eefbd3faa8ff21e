"""Application service: Checkout use case.

Coordinates the identity check, order assembly, stock commit and
receipt handoff as one logical unit of work:

    STARTED -> VALIDATING -> COMMITTING -> COMMITTED | ROLLED_BACK

Everything up to and including the commit happens inside a single
UnitOfWork; any failure there leaves orders and stock untouched.  The
receipt is handed to the notifier only after the commit, and nothing
the notifier does can turn a placed order into a failed checkout.

Checkouts are never retried here.  A resubmitted cart is a brand-new
attempt and is re-validated from scratch.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

import structlog

from storefront.application.access import authenticate
from storefront.application.dto import CheckoutResult, Receipt
from storefront.application.notifications import ReceiptNotifier
from storefront.application.ports import IdentityProvider
from storefront.domain.exceptions import (
    DomainException,
    EmailNotVerified,
    PersistenceFailure,
)
from storefront.domain.model.checkout import CheckoutRequest
from storefront.domain.model.identity import Identity
from storefront.domain.model.order import Order
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.order_assembler import OrderAssembler
from storefront.observability.metrics import (
    storefront_checkout_duration_seconds,
    storefront_checkout_total,
    storefront_receipt_failures_total,
)

logger = structlog.get_logger(__name__)


class CheckoutState(Enum):
    STARTED = "started"
    VALIDATING = "validating"
    COMMITTING = "committing"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class CheckoutHandler:

    def __init__(
        self,
        identity_provider: IdentityProvider,
        uow_factory: Callable[[], UnitOfWork],
        notifier: ReceiptNotifier,
        assembler: OrderAssembler | None = None,
    ) -> None:
        self._identity_provider = identity_provider
        self._uow_factory = uow_factory
        self._notifier = notifier
        self._assembler = assembler or OrderAssembler()

    def handle(self, request: CheckoutRequest) -> CheckoutResult:
        """Place an order for the current caller.

        Returns a successful result carrying the new order ID, or a
        failed result carrying one user-facing error message.
        """
        return self._run(lambda: request)

    def handle_payload(self, payload: Mapping[str, Any]) -> CheckoutResult:
        """Same as ``handle`` for the wire shape.

        The caller is authorized before the payload is parsed, so an
        anonymous caller is told to sign in even when the body is malformed.
        """
        return self._run(lambda: CheckoutRequest.from_payload(payload))

    def _run(self, build_request: Callable[[], CheckoutRequest]) -> CheckoutResult:
        started = time.perf_counter()
        log = logger
        state = CheckoutState.STARTED
        try:
            identity = self._authorize()
            log = log.bind(user_id=identity.user_id)

            state = self._advance(log, CheckoutState.VALIDATING)
            request = build_request()
            request.validate()

            state = self._advance(log, CheckoutState.COMMITTING)
            order = self._commit(identity, request)
        except DomainException as exc:
            self._reject(log, state, exc)
            storefront_checkout_total.labels(status=exc.code).inc()
            return CheckoutResult.failed(exc)
        finally:
            storefront_checkout_duration_seconds.observe(time.perf_counter() - started)

        log = log.bind(order_id=order.id)
        self._advance(log, CheckoutState.COMMITTED, total=order.total_amount.to_plain())
        storefront_checkout_total.labels(status="completed").inc()

        self._hand_off_receipt(log, order)
        return CheckoutResult.placed(order.id)

    # --- Steps ----------------------------------------------------------------

    def _authorize(self) -> Identity:
        identity = authenticate(self._identity_provider)
        if not identity.may_purchase:
            raise EmailNotVerified()
        return identity

    def _commit(self, identity: Identity, request: CheckoutRequest) -> Order:
        with self._uow_factory() as uow:
            snapshot = uow.products.get_many(request.product_ids())
            order = self._assembler.assemble(identity.user_id, request, snapshot)
            uow.orders.add(order)
            # Fixed product order keeps row-lock acquisition deadlock-free.
            for product_id, quantity in sorted(order.quantities_by_product().items()):
                uow.stock.decrement(product_id, quantity)
            uow.commit()
        return order

    def _hand_off_receipt(self, log, order: Order) -> None:
        try:
            self._notifier.notify(Receipt.from_order(order))
        except Exception:
            storefront_receipt_failures_total.inc()
            log.exception("receipt_handoff_failed")

    # --- Logging --------------------------------------------------------------

    @staticmethod
    def _advance(log, state: CheckoutState, **fields) -> CheckoutState:
        log.debug("checkout_state", state=state.value, **fields)
        if state is CheckoutState.COMMITTED:
            log.info("checkout_committed", **fields)
        return state

    @staticmethod
    def _reject(log, state: CheckoutState, exc: DomainException) -> None:
        final = (
            CheckoutState.ROLLED_BACK if state is CheckoutState.COMMITTING else state
        )
        fields = {"state": final.value, "error_code": exc.code}
        if isinstance(exc, PersistenceFailure):
            log.error("checkout_failed", reason=str(exc), exc_info=exc, **fields)
        else:
            log.info("checkout_rejected", reason=str(exc), **fields)
