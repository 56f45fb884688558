"""Processor handle."""

from billing_processors.models import ProcessorKey
from billing_processors.persistence import PersistenceMechanism
from billing_processors.providers import MerchantServicesProvider


class ProcessorHandle:
    """
    A built provider client together with the persistence delegate it
    stores through.

    Handles are compared by identity. The cache hands out the same instance
    for every selection of an equivalent configuration.
    """

    def __init__(
        self,
        key: ProcessorKey,
        provider: MerchantServicesProvider,
        persistence: PersistenceMechanism,
    ) -> None:
        self.key = key
        self.provider = provider
        self.persistence = persistence

    @property
    def provider_id(self) -> str:
        return self.key.provider_id

    def __repr__(self) -> str:
        return (
            f"ProcessorHandle(provider_id={self.key.provider_id!r}, "
            f"class_name={self.key.class_name!r})"
        )
