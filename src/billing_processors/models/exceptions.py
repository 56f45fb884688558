"""Custom exceptions for billing processor selection."""


class ProcessorError(Exception):
    """Base exception for processor-related errors."""

    pass


class ProviderResolutionError(ProcessorError):
    """
    Raised when a provider client cannot be built for a configuration.

    Either the strategy id is not registered, or the registered strategy
    exposes no builder for any of the parameter shapes tried
    (provider id plus four, three, two, one or zero parameters).

    This is a TERMINAL error for the selected configuration. Nothing is
    added to the processor cache.
    """

    pass


class PersistenceError(ProcessorError):
    """
    Raised when the persistence delegate cannot store or update a record.

    Examples:
    - Principal is not a ConnectorPrincipal / group is not an AccountGroup
    - Referenced account, processor, card or transaction does not exist
    - Stored transaction is not in the expected status
    - Platform I/O failure (original error is chained as __cause__)
    """

    pass
