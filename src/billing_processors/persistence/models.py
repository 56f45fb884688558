"""Card and transaction models exchanged with the persistence delegate."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class TransactionStatus(str, Enum):
    """Transaction status as stored on the platform."""

    PROCESSING = "PROCESSING"
    LOCAL_ERROR = "LOCAL_ERROR"
    IO_ERROR = "IO_ERROR"
    ERROR = "ERROR"
    DECLINED = "DECLINED"
    HOLD = "HOLD"
    AUTHORIZED = "AUTHORIZED"
    CAPTURED = "CAPTURED"
    VOID = "VOID"


@dataclass
class CreditCard:
    """
    A stored or about-to-be-stored card.

    card_number and the expiration are only populated while a card is being
    stored or replaced. Cards read back from the platform carry the masked
    number only.
    """

    principal_name: str | None
    group_name: str | None
    provider_id: str
    persistence_unique_id: str | None = None
    provider_unique_id: str | None = None
    card_number: str | None = None
    masked_card_number: str | None = None
    expiration_month: int | None = None
    expiration_year: int | None = None
    card_code: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    company_name: str | None = None
    email: str | None = None
    phone: str | None = None
    fax: str | None = None
    customer_id: str | None = None
    customer_tax_id: str | None = None
    street_address1: str | None = None
    street_address2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country_code: str | None = None
    comments: str | None = None

    def __post_init__(self) -> None:
        if self.card_number and not self.masked_card_number:
            self.masked_card_number = self.mask_card_number(self.card_number)

    @staticmethod
    def mask_card_number(card_number: str) -> str:
        """Mask all but the last four digits, e.g. XXXXXXXXXXXX4242."""
        digits = "".join(ch for ch in card_number if ch.isdigit())
        if len(digits) <= 4:
            return "X" * len(digits)
        return "X" * (len(digits) - 4) + digits[-4:]

    def cardholder_fields(self) -> dict[str, Any]:
        """Fields shared by card insert and card update on the platform."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "company_name": self.company_name,
            "email": self.email,
            "phone": self.phone,
            "fax": self.fax,
            "customer_tax_id": self.customer_tax_id,
            "street_address1": self.street_address1,
            "street_address2": self.street_address2,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
        }


@dataclass
class TransactionRequest:
    """What was asked of the provider."""

    currency: str
    amount: Decimal
    test_mode: bool = False
    duplicate_window: int = 120
    order_number: str | None = None
    tax_amount: Decimal | None = None
    tax_exempt: bool = False
    shipping_amount: Decimal | None = None
    duty_amount: Decimal | None = None
    shipping_first_name: str | None = None
    shipping_last_name: str | None = None
    shipping_company_name: str | None = None
    shipping_street_address1: str | None = None
    shipping_street_address2: str | None = None
    shipping_city: str | None = None
    shipping_state: str | None = None
    shipping_postal_code: str | None = None
    shipping_country_code: str | None = None
    email_customer: bool = False
    merchant_email: str | None = None
    invoice_number: str | None = None
    purchase_order_number: str | None = None
    description: str | None = None


@dataclass
class AuthorizationResult:
    """
    Provider response to an authorization.

    Each normalized field (approval_result, decline_reason, ...) has a
    provider_* twin holding the raw provider value.
    """

    communication_result: str | None = None
    provider_error_code: str | None = None
    error_code: str | None = None
    provider_error_message: str | None = None
    provider_unique_id: str | None = None
    provider_approval_result: str | None = None
    approval_result: str | None = None
    provider_decline_reason: str | None = None
    decline_reason: str | None = None
    provider_review_reason: str | None = None
    review_reason: str | None = None
    provider_cvv_result: str | None = None
    cvv_result: str | None = None
    provider_avs_result: str | None = None
    avs_result: str | None = None
    approval_code: str | None = None


@dataclass
class CaptureResult:
    """Provider response to a capture."""

    communication_result: str | None = None
    provider_error_code: str | None = None
    error_code: str | None = None
    provider_error_message: str | None = None
    provider_unique_id: str | None = None


@dataclass
class Transaction:
    """A card transaction as tracked by the persistence delegate."""

    provider_id: str
    credit_card: CreditCard
    request: TransactionRequest
    status: TransactionStatus = TransactionStatus.PROCESSING
    persistence_unique_id: str | None = None
    authorization_result: AuthorizationResult = field(default_factory=AuthorizationResult)
    capture_result: CaptureResult = field(default_factory=CaptureResult)
    capture_time: datetime | None = None
    capture_principal_name: str | None = None


def credit_card_from_record(record: Any) -> CreditCard:
    """
    Build a CreditCard from a platform card record.

    The full card number and expiration never leave the platform; only the
    masked card info is copied.
    """
    return CreditCard(
        persistence_unique_id=str(record.pkey),
        principal_name=record.principal_name,
        group_name=record.group_name,
        provider_id=record.processor.provider_id,
        provider_unique_id=record.provider_unique_id,
        masked_card_number=record.card_info,
        first_name=record.first_name,
        last_name=record.last_name,
        company_name=record.company_name,
        email=None if record.email is None else str(record.email),
        phone=record.phone,
        fax=record.fax,
        customer_tax_id=record.customer_tax_id,
        street_address1=record.street_address1,
        street_address2=record.street_address2,
        city=record.city,
        state=record.state,
        postal_code=record.postal_code,
        country_code=record.country_code.code,
        comments=record.description,
    )
