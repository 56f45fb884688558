"""
Persistence delegate for processor handles.

Every processor handle stores its cards and transactions through one
PersistenceMechanism. The platform implementation maps them onto the
account platform's records through the connector carried by the principal.
"""

from billing_processors.persistence.base import PersistenceMechanism
from billing_processors.persistence.models import (
    AuthorizationResult,
    CaptureResult,
    CreditCard,
    Transaction,
    TransactionRequest,
    TransactionStatus,
    credit_card_from_record,
)
from billing_processors.persistence.platform import (
    PlatformConnector,
    PlatformPersistenceMechanism,
)
from billing_processors.persistence.principals import AccountGroup, ConnectorPrincipal

__all__ = [
    "AccountGroup",
    "AuthorizationResult",
    "CaptureResult",
    "ConnectorPrincipal",
    "CreditCard",
    "PersistenceMechanism",
    "PlatformConnector",
    "PlatformPersistenceMechanism",
    "Transaction",
    "TransactionRequest",
    "TransactionStatus",
    "credit_card_from_record",
]
