"""Base interface for the persistence delegate."""

from abc import ABC, abstractmethod

from billing_processors.persistence.models import CreditCard, Transaction
from billing_processors.persistence.principals import AccountGroup, ConnectorPrincipal


class PersistenceMechanism(ABC):
    """
    Abstract base class for card and transaction storage.

    Implementations receive the acting principal on every call and must not
    keep per-account state, since one instance is shared by every processor
    handle in the process.

    All methods raise PersistenceError on failure.
    """

    @abstractmethod
    def store_credit_card(self, principal: ConnectorPrincipal, credit_card: CreditCard) -> str:
        """Store a new card and return its persistence id."""
        pass

    @abstractmethod
    def update_credit_card(self, principal: ConnectorPrincipal, credit_card: CreditCard) -> None:
        """Update the cardholder details of a stored card."""
        pass

    @abstractmethod
    def update_card_number(
        self,
        principal: ConnectorPrincipal,
        credit_card: CreditCard,
        card_number: str,
        expiration_month: int,
        expiration_year: int,
    ) -> None:
        """Replace the card number and expiration of a stored card."""
        pass

    @abstractmethod
    def update_expiration(
        self,
        principal: ConnectorPrincipal,
        credit_card: CreditCard,
        expiration_month: int,
        expiration_year: int,
    ) -> None:
        """Replace the expiration of a stored card."""
        pass

    @abstractmethod
    def delete_credit_card(self, principal: ConnectorPrincipal, credit_card: CreditCard) -> None:
        pass

    @abstractmethod
    def insert_transaction(
        self,
        principal: ConnectorPrincipal,
        group: AccountGroup,
        transaction: Transaction,
    ) -> str:
        """Record a new PROCESSING transaction and return its persistence id."""
        pass

    @abstractmethod
    def sale_completed(self, principal: ConnectorPrincipal, transaction: Transaction) -> None:
        """Store authorization and capture results of a sale."""
        pass

    @abstractmethod
    def authorize_completed(self, principal: ConnectorPrincipal, transaction: Transaction) -> None:
        """Store the authorization result of an authorize-only transaction."""
        pass

    @abstractmethod
    def void_completed(self, principal: ConnectorPrincipal, transaction: Transaction) -> None:
        pass
