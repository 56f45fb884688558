"""
Mock merchant services provider for local development and testing.

Configured like any other provider row on the account platform:

    provider_id = "test"
    class_name  = "mock"
    param1      = "approved" | "declined"   (optional)
    param2      = "true" | "false"          (optional, card storage)
"""

import structlog

from billing_processors.config import settings
from billing_processors.providers.base import MerchantServicesProvider

logger = structlog.get_logger(__name__)

VALID_RESPONSES = ("approved", "declined")


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("true", "yes", "1"):
        return True
    if normalized in ("false", "no", "0"):
        return False
    raise ValueError(f"Invalid boolean parameter: {value!r}")


class MockProvider(MerchantServicesProvider):
    """
    Provider that never leaves the process.

    Args:
        provider_id: Business identifier of the processor row
        default_response: "approved" or "declined"; defaults to settings.mock.default_response
        can_store: "true" or "false"; defaults to "true"
    """

    SUPPORTED_ARITIES = (3, 2, 1)

    def __init__(
        self,
        provider_id: str,
        default_response: str | None = None,
        can_store: str | None = None,
    ) -> None:
        super().__init__(provider_id)

        response = (default_response or settings.mock.default_response).lower()
        if response not in VALID_RESPONSES:
            raise ValueError(
                f"Invalid default_response: {default_response}. "
                f"Expected one of: {', '.join(VALID_RESPONSES)}"
            )
        self.default_response = response
        self._can_store = True if can_store is None else _parse_bool(can_store)

        logger.debug(
            "mock_provider_initialized",
            provider_id=provider_id,
            default_response=self.default_response,
            can_store=self._can_store,
        )

    @property
    def can_store_credit_cards(self) -> bool:
        return self._can_store
