"""Engine configuration.

FluentConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from fluentform.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class FluentConfig:
    """Engine configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FluentConfig(max_depth=4, messages={"required": "Required"})
    """

    # Render context: published rule maps live under "<prefix>_<model>"
    rules_key_prefix: str = "__FluentValidationRules"

    # Attribute set on the <form> once its rule map has been published
    form_marker_attribute: str = "data-fluent-validation"

    # Nested expansion stops after this many levels below the root
    max_depth: int = 16

    # Per-kind default message overrides, e.g. {"required": "Required"}
    messages: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be at least 1, got {self.max_depth}"
            raise ConfigurationError(msg)
        if not self.rules_key_prefix:
            msg = "rules_key_prefix must not be empty"
            raise ConfigurationError(msg)
