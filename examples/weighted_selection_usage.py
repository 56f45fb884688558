"""
Example usage of weighted processor selection.

This example wires a selector the way a host application does at startup,
then selects processors for an account with two enabled mock processors
weighted 1:3. Nothing here contacts a payment gateway.
"""

from collections import Counter

from billing_processors.config import settings
from billing_processors.logging_config import configure_logging
from billing_processors.models import ProcessorConfig
from billing_processors.processors import build_selector


def example_weighted_split(selector):
    """Selection frequency follows the configured weights."""
    print("=== Example 1: Weighted Split (1:3) ===\n")

    configs = [
        ProcessorConfig(provider_id="mock-light", class_name="mock", weight=1),
        ProcessorConfig(provider_id="mock-heavy", class_name="mock", param1="declined", weight=3),
        ProcessorConfig(provider_id="mock-off", class_name="mock", enabled=False, weight=10),
    ]

    counts = Counter(selector.select_processor(configs).provider_id for _ in range(10_000))

    for provider_id, count in sorted(counts.items()):
        print(f"{provider_id}: {count / 10_000:.1%}")
    print(f"Handles built: {len(selector.cache)}")
    print()


def example_no_processor(selector):
    """An account with nothing enabled gets no processor."""
    print("=== Example 2: No Processor Available ===\n")

    configs = [ProcessorConfig(provider_id="mock-off", class_name="mock", enabled=False)]

    print(f"Selected: {selector.select_processor(configs)}")
    print()


def main():
    configure_logging(log_level=settings.log_level, format_as_json=False)

    # One selector (and cache) per process
    selector = build_selector()

    example_weighted_split(selector)
    example_no_processor(selector)


if __name__ == "__main__":
    main()
