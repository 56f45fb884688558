"""Base interface for merchant services providers."""

from abc import ABC, abstractmethod
from typing import ClassVar


class MerchantServicesProvider(ABC):
    """
    Abstract base class for merchant services provider clients.

    A provider is built from a provider id plus up to four opaque string
    parameters (credentials, endpoints, ...). Each subclass declares the
    parameter counts its constructor accepts in SUPPORTED_ARITIES, where the
    count includes the provider id. The registry uses that declaration to
    pick a constructor shape without inspecting signatures.
    """

    SUPPORTED_ARITIES: ClassVar[tuple[int, ...]] = (1,)

    def __init__(self, provider_id: str) -> None:
        self.provider_id = provider_id

    @property
    @abstractmethod
    def can_store_credit_cards(self) -> bool:
        """Whether the provider can keep card data on its side."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider_id={self.provider_id!r})"
