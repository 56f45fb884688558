"""
Stripe merchant services provider.

Holds a configured stripe.StripeClient for the account's Stripe credentials.
Building the provider does not contact Stripe.

Parameter mapping from the processor row:

    param1 -> api_key (required)
    param2 -> stripe_account (optional, Connect account id)
    param3 -> stripe_version (optional, pinned API version)
"""

from typing import Any

import stripe
import structlog

from billing_processors.config import settings
from billing_processors.providers.base import MerchantServicesProvider

logger = structlog.get_logger(__name__)


class StripeProvider(MerchantServicesProvider):
    """
    Stripe provider client.

    Reference:
    - https://github.com/stripe/stripe-python#usage
    """

    SUPPORTED_ARITIES = (4, 3, 2)

    def __init__(
        self,
        provider_id: str,
        api_key: str | None,
        stripe_account: str | None = None,
        stripe_version: str | None = None,
    ) -> None:
        """
        Initialize Stripe provider.

        Args:
            provider_id: Business identifier of the processor row
            api_key: Stripe secret API key (sk_test_... or sk_live_...)
            stripe_account: Connected account to act on behalf of
            stripe_version: API version to pin requests to

        Raises:
            ValueError: If api_key is empty
        """
        super().__init__(provider_id)

        if not api_key:
            raise ValueError(f"Stripe api_key is required for provider {provider_id}")

        self.api_key = api_key
        self.stripe_account = stripe_account
        self.stripe_version = stripe_version

        client_options: dict[str, Any] = {
            # Retries are the caller's decision
            "max_network_retries": settings.stripe.max_network_retries,
        }
        if stripe_account:
            client_options["stripe_account"] = stripe_account
        if stripe_version:
            client_options["stripe_version"] = stripe_version

        self.client = stripe.StripeClient(api_key, **client_options)

        logger.info(
            "stripe_provider_initialized",
            provider_id=provider_id,
            live_mode=api_key.startswith("sk_live_"),
            stripe_account=stripe_account,
        )

    @property
    def can_store_credit_cards(self) -> bool:
        return True
