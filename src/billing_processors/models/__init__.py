"""Domain models for billing processor selection."""

from billing_processors.models.exceptions import (
    PersistenceError,
    ProcessorError,
    ProviderResolutionError,
)
from billing_processors.models.processor_config import ProcessorConfig, ProcessorKey

__all__ = [
    "PersistenceError",
    "ProcessorConfig",
    "ProcessorError",
    "ProcessorKey",
    "ProviderResolutionError",
]
