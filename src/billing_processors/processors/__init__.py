"""
Processor selection and handle caching.

- handle.ProcessorHandle: Provider client paired with the persistence delegate
- cache.ProcessorCache: One handle per unique processor configuration
- selector.ProcessorSelector: Weighted random choice among enabled configs
"""

from billing_processors.processors.cache import ProcessorCache
from billing_processors.processors.handle import ProcessorHandle
from billing_processors.processors.selector import (
    AccountConfigSource,
    ProcessorSelector,
    RandomSource,
    build_selector,
)

__all__ = [
    "AccountConfigSource",
    "ProcessorCache",
    "ProcessorHandle",
    "ProcessorSelector",
    "RandomSource",
    "build_selector",
]
