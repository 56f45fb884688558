"""
Process-wide processor handle cache.

One cache is built at startup and shared by every selector in the process.
A single lock covers lookup, provider construction and insertion, so at most
one handle is ever built per ProcessorKey and every caller sees that handle.
Misses for different keys are serialized as well; construction happens once
per unique configuration for the life of the process.
"""

import threading

import structlog

from billing_processors.models import ProcessorConfig, ProcessorKey
from billing_processors.persistence import PersistenceMechanism
from billing_processors.processors.handle import ProcessorHandle
from billing_processors.providers import ProviderFactory

logger = structlog.get_logger(__name__)


class ProcessorCache:
    """Maps processor identity to its singleton handle."""

    def __init__(
        self,
        provider_factory: ProviderFactory,
        persistence: PersistenceMechanism,
    ) -> None:
        self.provider_factory = provider_factory
        self.persistence = persistence
        self._handles: dict[ProcessorKey, ProcessorHandle] = {}
        self._lock = threading.Lock()

    def get_or_create_handle(self, config: ProcessorConfig) -> ProcessorHandle:
        """
        Get the handle for a configuration, building it on first use.

        Args:
            config: Processor configuration (enabled flag and weight are ignored)

        Returns:
            The cached handle for the configuration's identity

        Raises:
            ProviderResolutionError: If no provider can be built. The cache
                is left unchanged.
            Exception: Anything raised while building the provider, unchanged
        """
        key = ProcessorKey.from_config(config)

        with self._lock:
            handle = self._handles.get(key)
            if handle is None:
                provider = self.provider_factory.build(
                    key.provider_id,
                    key.class_name,
                    key.param1,
                    key.param2,
                    key.param3,
                    key.param4,
                )
                handle = ProcessorHandle(key, provider, self.persistence)
                self._handles[key] = handle

                logger.info(
                    "processor_handle_created",
                    provider_id=key.provider_id,
                    provider_name=key.class_name,
                    cached_handles=len(self._handles),
                )
            return handle

    def clear(self) -> None:
        """Drop every cached handle."""
        with self._lock:
            self._handles.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._handles
