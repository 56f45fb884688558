"""Processor configuration models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessorConfig:
    """
    One payment processor backend configured for an account.

    This is a read-only snapshot handed over by the account platform for a
    single selection call. A config takes part in selection only when it is
    enabled and has a positive weight.
    """

    provider_id: str
    class_name: str
    param1: str | None = None
    param2: str | None = None
    param3: str | None = None
    param4: str | None = None
    enabled: bool = True
    weight: int = 1

    def __post_init__(self) -> None:
        """Validate identity fields and weight."""
        if not self.provider_id:
            raise ValueError("provider_id is required")
        if not self.class_name:
            raise ValueError("class_name is required")
        if self.weight < 0:
            raise ValueError(f"weight must be non-negative, got {self.weight}")

    @property
    def is_selectable(self) -> bool:
        """True if this config may be picked by a weighted draw."""
        return self.enabled and self.weight > 0

    @property
    def params(self) -> tuple[str | None, str | None, str | None, str | None]:
        return (self.param1, self.param2, self.param3, self.param4)

    @property
    def key(self) -> "ProcessorKey":
        return ProcessorKey.from_config(self)


@dataclass(frozen=True)
class ProcessorKey:
    """
    Cache identity of a processor.

    Two configs with the same provider id, class name and parameters share
    one processor handle. Enabled flag and weight are not part of the key.
    """

    provider_id: str
    class_name: str
    param1: str | None = None
    param2: str | None = None
    param3: str | None = None
    param4: str | None = None

    @classmethod
    def from_config(cls, config: ProcessorConfig) -> "ProcessorKey":
        return cls(
            provider_id=config.provider_id,
            class_name=config.class_name,
            param1=config.param1,
            param2=config.param2,
            param3=config.param3,
            param4=config.param4,
        )
