"""
Account platform persistence delegate.

Stores cards and transactions as platform records. Every call is made with
the connector carried by the principal, so the platform's own security
model applies. The principal must be a ConnectorPrincipal and any group an
AccountGroup.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Protocol

import structlog

from billing_processors.models import PersistenceError
from billing_processors.persistence.base import PersistenceMechanism
from billing_processors.persistence.models import CreditCard, Transaction, TransactionStatus
from billing_processors.persistence.principals import AccountGroup, ConnectorPrincipal

logger = structlog.get_logger(__name__)


class PlatformConnector(Protocol):
    """
    Subset of the account platform client used for persistence.

    Lookups return None when the record does not exist or is not visible
    to the connector's administrator. I/O failures raise OSError.
    """

    def get_account(self, accounting: str) -> Any | None: ...

    def get_current_account(self) -> Any: ...

    def get_current_administrator(self) -> Any: ...

    def get_processor(self, provider_id: str) -> Any | None: ...

    def get_country_code(self, code: str) -> Any | None: ...

    def get_credit_card(self, pkey: int) -> Any | None: ...

    def get_transaction(self, pkey: int) -> Any | None: ...


def _connector(principal: Any) -> PlatformConnector:
    if principal is None:
        raise PersistenceError("principal is None")
    if not isinstance(principal, ConnectorPrincipal):
        raise PersistenceError(f"principal is not a ConnectorPrincipal: {principal}")
    return principal.connector


def _principal_name(principal: Any) -> str | None:
    _connector(principal)
    return principal.principal_name


def _group(group: Any) -> AccountGroup:
    if group is None:
        raise PersistenceError("group is None")
    if not isinstance(group, AccountGroup):
        raise PersistenceError(f"group is not an AccountGroup: {group}")
    return group


def _parse_pkey(persistence_unique_id: str | None) -> int:
    try:
        return int(persistence_unique_id)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise PersistenceError(
            f"Unable to convert persistence id to pkey: {persistence_unique_id}"
        ) from e


def _require(record: Any | None, description: str) -> Any:
    if record is None:
        raise PersistenceError(f"Unable to find {description}")
    return record


def _enum_name(value: Any) -> str | None:
    if value is None:
        return None
    return getattr(value, "value", value)


@contextmanager
def _platform_errors() -> Iterator[None]:
    """Wrap platform I/O failures as PersistenceError."""
    try:
        yield
    except OSError as e:
        raise PersistenceError(str(e) or e.__class__.__name__) from e


class PlatformPersistenceMechanism(PersistenceMechanism):
    """
    Stores card and transaction state on the account platform.

    Stateless; one instance serves every processor handle.
    """

    def store_credit_card(self, principal: ConnectorPrincipal, credit_card: CreditCard) -> str:
        conn = _connector(principal)
        principal_name = _principal_name(principal)
        with _platform_errors():
            account = _require(
                conn.get_account(credit_card.group_name),
                f"Account: {credit_card.group_name}",
            )
            processor = _require(
                conn.get_processor(credit_card.provider_id),
                f"Processor: {credit_card.provider_id}",
            )
            country_code = _require(
                conn.get_country_code(credit_card.country_code),
                f"CountryCode: {credit_card.country_code}",
            )
            pkey = account.add_credit_card(
                processor=processor,
                group_name=credit_card.group_name,
                card_info=credit_card.masked_card_number,
                provider_unique_id=credit_card.provider_unique_id,
                country_code=country_code,
                principal_name=principal_name,
                description=credit_card.comments,
                card_number=credit_card.card_number,
                expiration_month=credit_card.expiration_month,
                expiration_year=credit_card.expiration_year,
                **credit_card.cardholder_fields(),
            )

        logger.info(
            "credit_card_stored",
            provider_id=credit_card.provider_id,
            pkey=pkey,
        )
        return str(pkey)

    def update_credit_card(self, principal: ConnectorPrincipal, credit_card: CreditCard) -> None:
        conn = _connector(principal)
        pkey = _parse_pkey(credit_card.persistence_unique_id)
        with _platform_errors():
            stored_card = _require(conn.get_credit_card(pkey), f"CreditCard: {pkey}")
            country_code = _require(
                conn.get_country_code(credit_card.country_code),
                f"CountryCode: {credit_card.country_code}",
            )
            stored_card.update(
                country_code=country_code,
                description=credit_card.comments,
                **credit_card.cardholder_fields(),
            )

    def update_card_number(
        self,
        principal: ConnectorPrincipal,
        credit_card: CreditCard,
        card_number: str,
        expiration_month: int,
        expiration_year: int,
    ) -> None:
        conn = _connector(principal)
        pkey = _parse_pkey(credit_card.persistence_unique_id)
        with _platform_errors():
            stored_card = _require(conn.get_credit_card(pkey), f"CreditCard: {pkey}")
            stored_card.update_card_number_and_expiration(
                card_info=CreditCard.mask_card_number(card_number),
                card_number=card_number,
                expiration_month=expiration_month,
                expiration_year=expiration_year,
            )

    def update_expiration(
        self,
        principal: ConnectorPrincipal,
        credit_card: CreditCard,
        expiration_month: int,
        expiration_year: int,
    ) -> None:
        conn = _connector(principal)
        pkey = _parse_pkey(credit_card.persistence_unique_id)
        with _platform_errors():
            stored_card = _require(conn.get_credit_card(pkey), f"CreditCard: {pkey}")
            stored_card.update_card_expiration(
                expiration_month=expiration_month,
                expiration_year=expiration_year,
            )

    def delete_credit_card(self, principal: ConnectorPrincipal, credit_card: CreditCard) -> None:
        conn = _connector(principal)
        pkey = _parse_pkey(credit_card.persistence_unique_id)
        with _platform_errors():
            stored_card = _require(conn.get_credit_card(pkey), f"CreditCard: {pkey}")
            stored_card.remove()

        logger.info("credit_card_deleted", pkey=pkey)

    def insert_transaction(
        self,
        principal: ConnectorPrincipal,
        group: AccountGroup,
        transaction: Transaction,
    ) -> str:
        conn = _connector(principal)
        principal_name = _principal_name(principal)
        account_group = _group(group)
        credit_card = transaction.credit_card

        with _platform_errors():
            processor = _require(
                conn.get_processor(transaction.provider_id),
                f"Processor: {transaction.provider_id}",
            )

            # Card creator comes from the stored card when there is one
            if not credit_card.persistence_unique_id:
                card_created_by = conn.get_current_administrator()
                card_account = account_group.account
            else:
                card_pkey = _parse_pkey(credit_card.persistence_unique_id)
                stored_card = _require(conn.get_credit_card(card_pkey), f"CreditCard: {card_pkey}")
                # May be filtered from this administrator's view
                card_created_by = stored_card.created_by or conn.get_current_administrator()
                card_account = stored_card.account

            pkey = account_group.account.add_credit_card_transaction(
                processor=processor,
                group_name=account_group.group_name,
                request=asdict(transaction.request),
                credit_card_created_by=card_created_by,
                credit_card_principal_name=credit_card.principal_name,
                credit_card_account=card_account,
                credit_card_group_name=credit_card.group_name,
                credit_card_provider_unique_id=credit_card.provider_unique_id,
                credit_card_masked_card_number=credit_card.masked_card_number,
                credit_card_country_code=credit_card.country_code,
                credit_card_comments=credit_card.comments,
                credit_card_fields=credit_card.cardholder_fields(),
                authorization_time=datetime.now(timezone.utc),
                authorization_principal_name=principal_name,
            )

        logger.info(
            "transaction_inserted",
            provider_id=transaction.provider_id,
            pkey=pkey,
        )
        return str(pkey)

    def _processing_transaction(self, conn: PlatformConnector, transaction: Transaction) -> Any:
        """Look up the stored transaction and check it is still PROCESSING."""
        _require(
            conn.get_processor(transaction.provider_id),
            f"Processor: {transaction.provider_id}",
        )
        pkey = _parse_pkey(transaction.persistence_unique_id)
        stored = _require(conn.get_transaction(pkey), f"Transaction: {pkey}")
        if _enum_name(stored.status) != TransactionStatus.PROCESSING.value:
            raise PersistenceError(
                f"Transaction #{pkey} must have status {TransactionStatus.PROCESSING.value}, "
                f"its current status is {_enum_name(stored.status)}"
            )
        return stored

    def sale_completed(self, principal: ConnectorPrincipal, transaction: Transaction) -> None:
        """
        Store the results of a sale transaction:

        1. authorization result
        2. capture time and capture principal
        3. capture result
        4. status

        The stored status must be PROCESSING.
        """
        conn = _connector(principal)
        with _platform_errors():
            stored = self._processing_transaction(conn, transaction)
            stored.sale_completed(
                authorization=asdict(transaction.authorization_result),
                capture_time=transaction.capture_time,
                capture_principal_name=transaction.capture_principal_name,
                capture=asdict(transaction.capture_result),
                status=transaction.status.value,
            )

        logger.info(
            "sale_completed",
            provider_id=transaction.provider_id,
            pkey=transaction.persistence_unique_id,
            status=transaction.status.value,
        )

    def authorize_completed(self, principal: ConnectorPrincipal, transaction: Transaction) -> None:
        """
        Store the results of an authorize transaction:

        1. authorization result
        2. status

        The stored status must be PROCESSING.
        """
        conn = _connector(principal)
        with _platform_errors():
            stored = self._processing_transaction(conn, transaction)
            stored.authorize_completed(
                authorization=asdict(transaction.authorization_result),
                status=transaction.status.value,
            )

        logger.info(
            "authorize_completed",
            provider_id=transaction.provider_id,
            pkey=transaction.persistence_unique_id,
            status=transaction.status.value,
        )

    def void_completed(self, principal: ConnectorPrincipal, transaction: Transaction) -> None:
        _connector(principal)
        # TODO: define void semantics with billing product owners before storing anything
        raise NotImplementedError("void_completed is not supported by the platform delegate")
