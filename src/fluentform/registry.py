"""Validator registry — model type → validator lookup.

Plays the role of the dependency-injection container: the engine asks it
for the validator bound to an exact model type and treats the answer as
stable for the life of the process.

Free-threading safety:
    - Registration is guarded by a lock and normally happens at startup
    - ``freeze()`` rejects later registrations
    - Lookups read a dict that is no longer mutated once frozen
"""

import threading
from typing import Any, Protocol, runtime_checkable

from fluentform._internal.types import ModelType, ValidatorFactory
from fluentform.errors import ConfigurationError


@runtime_checkable
class Registry(Protocol):
    """Anything that can hand out the validator for a model type."""

    def lookup_validator(self, model_type: ModelType) -> Any | None: ...


class ValidatorRegistry:
    """Registry of validators keyed by the exact model type.

    Instances are registered as singletons; factories are called on every
    lookup (the engine's resolver cache keeps the first result)::

        registry = ValidatorRegistry()
        registry.add(OrderValidator())
        registry.add_factory(Address, AddressValidator)
        registry.freeze()
    """

    __slots__ = ("_entries", "_frozen", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._frozen = False
        # model type -> (instance, factory); exactly one is set
        self._entries: dict[ModelType, tuple[Any | None, ValidatorFactory | None]] = {}

    def add(self, validator: Any, model_type: ModelType | None = None) -> None:
        """Register a validator instance.

        *model_type* defaults to the validator's ``model_type`` attribute
        (set by ``ModelValidator[T]``).

        Raises:
            ConfigurationError: If the model type cannot be determined, is
                already registered, or the registry is frozen.
        """
        bound = model_type if model_type is not None else getattr(validator, "model_type", None)
        if not isinstance(bound, type):
            msg = (
                f"Cannot determine the model type for {validator!r}; "
                "pass model_type= or subclass ModelValidator[Model]"
            )
            raise ConfigurationError(msg)
        self._register(bound, (validator, None))

    def add_factory(self, model_type: ModelType, factory: ValidatorFactory) -> None:
        """Register a zero-argument factory producing the validator for *model_type*."""
        self._register(model_type, (None, factory))

    def _register(
        self,
        model_type: ModelType,
        entry: tuple[Any | None, ValidatorFactory | None],
    ) -> None:
        with self._lock:
            if self._frozen:
                msg = f"Registry is frozen; cannot register a validator for {model_type.__qualname__}"
                raise ConfigurationError(msg)
            if model_type in self._entries:
                msg = f"Duplicate validator registration for {model_type.__qualname__}"
                raise ConfigurationError(msg)
            self._entries[model_type] = entry

    def freeze(self) -> None:
        """Reject further registrations."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup_validator(self, model_type: ModelType) -> Any | None:
        """Return the validator for exactly *model_type*, or ``None``."""
        entry = self._entries.get(model_type)
        if entry is None:
            return None
        instance, factory = entry
        if factory is not None:
            return factory()
        return instance

    def __contains__(self, model_type: object) -> bool:
        return model_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)
