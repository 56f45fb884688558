"""
Weighted processor selection.

An account may have several processors enabled at once. Each selection
picks one of them with probability weight / total weight of the enabled
processors, then returns its cached handle.
"""

import random
from collections.abc import Iterable
from typing import Protocol

import structlog

from billing_processors.config import Settings
from billing_processors.config import settings as default_settings
from billing_processors.models import ProcessorConfig
from billing_processors.persistence import PersistenceMechanism, PlatformPersistenceMechanism
from billing_processors.processors.cache import ProcessorCache
from billing_processors.processors.handle import ProcessorHandle
from billing_processors.providers import ProviderFactory

logger = structlog.get_logger(__name__)


class RandomSource(Protocol):
    """Uniform integers in [0, stop). random.Random satisfies this."""

    def randrange(self, stop: int) -> int: ...


class AccountConfigSource(Protocol):
    """Supplies the processor configs visible to the current account."""

    def get_credit_card_processors(self) -> list[ProcessorConfig]: ...


def choose_config(
    configs: Iterable[ProcessorConfig],
    random_source: RandomSource,
) -> ProcessorConfig | None:
    """
    Pick one selectable config by weighted random draw.

    Args:
        configs: Candidate configs, in platform order
        random_source: Source of the draw; not consulted when at most one
            config is selectable

    Returns:
        The chosen config, or None when no config is enabled with a
        positive weight

    Raises:
        AssertionError: If the weighted walk finds nothing, which means the
            weights changed under us or the random source returned a value
            outside [0, total_weight)
    """
    candidates = [config for config in configs if config.is_selectable]

    if not candidates:
        return None

    # One processor shortcut
    if len(candidates) == 1:
        return candidates[0]

    total_weight = sum(config.weight for config in candidates)
    position = random_source.randrange(total_weight)

    weight_so_far = 0
    for config in candidates:
        weight_so_far += config.weight
        if weight_so_far > position:
            return config

    raise AssertionError(
        f"Weighted selection found no processor: position={position}, "
        f"total_weight={total_weight}"
    )


class ProcessorSelector:
    """
    Selects a processor handle for an account.

    Args:
        cache: Process-wide handle cache
        random_source: Default source for weighted draws
    """

    def __init__(self, cache: ProcessorCache, random_source: RandomSource) -> None:
        self.cache = cache
        self.random_source = random_source

    def select_processor(
        self,
        configs: Iterable[ProcessorConfig],
        random_source: RandomSource | None = None,
    ) -> ProcessorHandle | None:
        """
        Choose an enabled processor by weight and return its handle.

        Args:
            configs: Immutable snapshot of the account's processor configs
            random_source: Overrides the selector's source for this call

        Returns:
            ProcessorHandle, or None if no processor is available

        Raises:
            ProviderResolutionError: If the chosen processor cannot be built.
                No other processor is tried.
        """
        if random_source is None:
            random_source = self.random_source

        selected = choose_config(configs, random_source)

        if selected is None:
            logger.warning("no_processor_available")
            return None

        logger.debug(
            "processor_selected",
            provider_id=selected.provider_id,
            provider_name=selected.class_name,
            weight=selected.weight,
        )

        return self.cache.get_or_create_handle(selected)

    def select_for_account(
        self,
        source: AccountConfigSource,
        random_source: RandomSource | None = None,
    ) -> ProcessorHandle | None:
        """
        Select a processor for the account behind source.

        Configs are fetched before the cache lock is taken.
        """
        configs = list(source.get_credit_card_processors())
        return self.select_processor(configs, random_source)


def build_selector(
    persistence: PersistenceMechanism | None = None,
    provider_factory: ProviderFactory | None = None,
    random_source: RandomSource | None = None,
    settings: Settings | None = None,
) -> ProcessorSelector:
    """
    Wire a selector and its cache at startup.

    Call once per process and share the result; each call creates a new,
    empty cache.

    Args:
        persistence: Delegate for every handle (defaults to the platform delegate)
        provider_factory: Provider registry (defaults to the bundled providers)
        random_source: Source for weighted draws (defaults to SystemRandom, or
            a seeded Random when settings.selection.random_seed is set)
        settings: Settings to read defaults from

    Returns:
        ProcessorSelector with a fresh cache
    """
    settings = settings or default_settings

    if persistence is None:
        persistence = PlatformPersistenceMechanism()
    if provider_factory is None:
        provider_factory = ProviderFactory.with_defaults()
    if random_source is None:
        seed = settings.selection.random_seed
        random_source = random.SystemRandom() if seed is None else random.Random(seed)

    cache = ProcessorCache(provider_factory, persistence)

    logger.info(
        "processor_selector_built",
        providers=provider_factory.list_providers(),
        seeded=settings.selection.random_seed is not None,
    )
    return ProcessorSelector(cache, random_source)
