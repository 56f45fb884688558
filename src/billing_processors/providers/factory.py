"""
Provider factory for building merchant services provider clients.

Processor rows on the account platform name their implementation with a
strategy id (class_name) and carry up to four opaque parameters. This
module resolves the strategy id against a registry and builds the provider
using the richest constructor shape the strategy exposes:

    (provider_id, param1, param2, param3, param4)
    (provider_id, param1, param2, param3)
    (provider_id, param1, param2)
    (provider_id, param1)
    (provider_id)

A shape the strategy does not expose is skipped. An error raised while a
matched shape is running is not a mismatch and propagates unchanged.
"""

from collections.abc import Callable

import structlog

from billing_processors.models import ProviderResolutionError
from billing_processors.providers.base import MerchantServicesProvider
from billing_processors.providers.mock_provider import MockProvider
from billing_processors.providers.stripe_provider import StripeProvider

logger = structlog.get_logger(__name__)

# provider_id plus param1..param4
MAX_ARITY = 5

ProviderBuilder = Callable[..., MerchantServicesProvider]


def _check_arity(arity: int) -> None:
    if not 1 <= arity <= MAX_ARITY:
        raise ValueError(f"arity must be between 1 and {MAX_ARITY}, got {arity}")


class ProviderFactory:
    """
    Registry of provider strategies keyed by strategy id.

    Each strategy maps to one builder per supported arity. Strategy ids are
    case-insensitive.
    """

    # Strategies bundled with this package
    _DEFAULT_PROVIDERS: dict[str, type[MerchantServicesProvider]] = {
        "stripe": StripeProvider,
        "mock": MockProvider,
    }

    def __init__(self) -> None:
        self._builders: dict[str, dict[int, ProviderBuilder]] = {}

    @classmethod
    def with_defaults(cls) -> "ProviderFactory":
        """Create a factory with the bundled providers registered."""
        factory = cls()
        for name, provider_class in cls._DEFAULT_PROVIDERS.items():
            factory.register_provider(name, provider_class)
        return factory

    def register_provider(
        self,
        name: str,
        provider_class: type[MerchantServicesProvider],
        arities: tuple[int, ...] | None = None,
    ) -> None:
        """
        Register a provider class under a strategy id.

        Args:
            name: Strategy id used in processor configs (e.g., "stripe")
            provider_class: MerchantServicesProvider subclass to register
            arities: Constructor parameter counts to expose, including the
                provider id. Defaults to provider_class.SUPPORTED_ARITIES.

        Raises:
            TypeError: If provider_class is not a MerchantServicesProvider
            ValueError: If an arity is outside 1..5

        Example:
            factory.register_provider("authorize_net", AuthorizeNetProvider)
        """
        if not (
            isinstance(provider_class, type)
            and issubclass(provider_class, MerchantServicesProvider)
        ):
            raise TypeError(
                f"{getattr(provider_class, '__name__', provider_class)!r} "
                "must inherit from MerchantServicesProvider"
            )

        if arities is None:
            arities = provider_class.SUPPORTED_ARITIES

        for arity in arities:
            _check_arity(arity)

        self._builders.setdefault(name.lower(), {})
        for arity in arities:
            self.register_builder(name, arity, provider_class)

        logger.info(
            "provider_registered",
            provider_name=name.lower(),
            provider_class=provider_class.__name__,
            arities=sorted(arities, reverse=True),
        )

    def register_builder(self, name: str, arity: int, builder: ProviderBuilder) -> None:
        """
        Register a single builder for one constructor shape.

        Args:
            name: Strategy id
            arity: Number of positional arguments the builder takes (1..5)
            builder: Callable returning a provider client
        """
        _check_arity(arity)
        self._builders.setdefault(name.lower(), {})[arity] = builder

    def list_providers(self) -> list[str]:
        """
        Get list of registered strategy ids.

        Returns:
            Sorted list of strategy ids
        """
        return sorted(self._builders.keys())

    def build(
        self,
        provider_id: str,
        class_name: str,
        param1: str | None = None,
        param2: str | None = None,
        param3: str | None = None,
        param4: str | None = None,
    ) -> MerchantServicesProvider:
        """
        Build a provider client for one processor configuration.

        Args:
            provider_id: Business identifier of the processor
            class_name: Strategy id to resolve
            param1..param4: Opaque strategy parameters

        Returns:
            The provider built by the first matching constructor shape

        Raises:
            ProviderResolutionError: If class_name is not registered, or no
                constructor shape matches
            Exception: Anything raised by the matched builder, unchanged
        """
        builders = self._builders.get(class_name.lower())
        if builders is None:
            available = ", ".join(self.list_providers())
            raise ProviderResolutionError(
                f"Unknown provider class: {class_name}. "
                f"Available providers: {available}"
            )

        args = (provider_id, param1, param2, param3, param4)
        for arity in range(MAX_ARITY, 0, -1):
            builder = builders.get(arity)
            if builder is None:
                continue

            provider = builder(*args[:arity])

            logger.info(
                "provider_built",
                provider_id=provider_id,
                provider_name=class_name.lower(),
                arity=arity,
            )
            return provider

        raise ProviderResolutionError(
            f"No constructor shape registered for provider class {class_name} "
            f"(provider_id={provider_id})"
        )
