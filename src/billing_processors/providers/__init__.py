"""
Merchant services provider integrations.

This module contains the provider client types a processor handle can wrap:
- base.MerchantServicesProvider: Abstract interface every provider implements
- stripe_provider.StripeProvider: Stripe client holder
- mock_provider.MockProvider: Test-mode provider for development and tests
- factory.ProviderFactory: Strategy-id registry with constructor-shape fallback
"""

from billing_processors.providers.base import MerchantServicesProvider
from billing_processors.providers.factory import MAX_ARITY, ProviderFactory
from billing_processors.providers.mock_provider import MockProvider
from billing_processors.providers.stripe_provider import StripeProvider

__all__ = [
    "MAX_ARITY",
    "MerchantServicesProvider",
    "MockProvider",
    "ProviderFactory",
    "StripeProvider",
]
