"""Constraint adapters and the rule descriptor.

Every constraint a validator declares is exposed to the engine through a
thin adapter: an object carrying a set of ``Capability`` tags plus plain
fields (``min``, ``max``, ``pattern``, ``comparison``, ``value``,
``error_message_source``). The classifier in ``fluentform.mapping`` only
reads those fields, so a binding for another validation library only has
to produce objects of the same shape.

Specializations list every capability they satisfy::

    MaximumLength(100).capabilities
    # frozenset({Capability.MAX_LENGTH, Capability.LENGTH})

The classifier probes the narrower capability first.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar


class Capability(StrEnum):
    """What a constraint checks, as seen by the classifier."""

    NOT_NULL = "not_null"
    NOT_EMPTY = "not_empty"
    EMAIL = "email"
    LENGTH = "length"
    MAX_LENGTH = "max_length"
    MIN_LENGTH = "min_length"
    INCLUSIVE_BETWEEN = "inclusive_between"
    EXCLUSIVE_BETWEEN = "exclusive_between"
    COMPARISON = "comparison"
    REGEX = "regex"
    CREDIT_CARD = "credit_card"
    PREDICATE = "predicate"
    CUSTOM = "custom"
    CHILD = "child"


class Comparison(StrEnum):
    """Operator of a ``Compare`` constraint."""

    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"


# ---------------------------------------------------------------------------
# Built-in constraints
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Constraint:
    """Base for the built-in constraints.

    ``error_message_source`` is the implementation-level message; a
    literal string set through ``with_message()`` on the rule takes
    precedence over it.
    """

    capabilities: ClassVar[frozenset[Capability]] = frozenset()

    error_message_source: str | Callable[..., str] | None = field(default=None, kw_only=True)


@dataclass(frozen=True, slots=True)
class NotNull(Constraint):
    capabilities = frozenset({Capability.NOT_NULL})


@dataclass(frozen=True, slots=True)
class NotEmpty(Constraint):
    capabilities = frozenset({Capability.NOT_EMPTY})


@dataclass(frozen=True, slots=True)
class EmailAddress(Constraint):
    capabilities = frozenset({Capability.EMAIL})


@dataclass(frozen=True, slots=True)
class Length(Constraint):
    """String length within ``min..max`` (exact when both are equal)."""

    capabilities = frozenset({Capability.LENGTH})

    min: int
    max: int


@dataclass(frozen=True, slots=True)
class MaximumLength(Constraint):
    capabilities = frozenset({Capability.MAX_LENGTH, Capability.LENGTH})

    max: int


@dataclass(frozen=True, slots=True)
class MinimumLength(Constraint):
    capabilities = frozenset({Capability.MIN_LENGTH, Capability.LENGTH})

    min: int


@dataclass(frozen=True, slots=True)
class InclusiveBetween(Constraint):
    capabilities = frozenset({Capability.INCLUSIVE_BETWEEN})

    min: Any
    max: Any


@dataclass(frozen=True, slots=True)
class ExclusiveBetween(Constraint):
    capabilities = frozenset({Capability.EXCLUSIVE_BETWEEN})

    min: Any
    max: Any


@dataclass(frozen=True, slots=True)
class Compare(Constraint):
    """Compare the value against a constant."""

    capabilities = frozenset({Capability.COMPARISON})

    comparison: Comparison
    value: Any


@dataclass(frozen=True, slots=True)
class RegularExpression(Constraint):
    capabilities = frozenset({Capability.REGEX})

    pattern: str


@dataclass(frozen=True, slots=True)
class CreditCard(Constraint):
    capabilities = frozenset({Capability.CREDIT_CARD})


@dataclass(frozen=True, slots=True)
class Predicate(Constraint):
    """Server-side predicate; rendered as a generic ``custom`` rule."""

    capabilities = frozenset({Capability.PREDICATE})

    predicate: Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class CustomConstraint(Constraint):
    capabilities = frozenset({Capability.CUSTOM})

    func: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class ChildValidator(Constraint):
    """Delegates a property to another validator. Has no client rule."""

    capabilities = frozenset({Capability.CHILD})

    validator: Any


def read_attribute(obj: object, name: str) -> Any:
    """``getattr(obj, name, None)`` that also absorbs errors raised by properties.

    Adapters may expose their parameters through computed properties; a
    property that raises reads as ``None``.
    """
    try:
        return getattr(obj, name, None)
    except Exception:
        return None


def capabilities_of(constraint: object) -> frozenset[Capability]:
    """Return the capabilities a constraint adapter declares.

    Reads ``capabilities`` (an iterable, or a single name) or a single
    ``capability``. Plain strings are accepted when they name a
    ``Capability``; unknown names are ignored.
    """
    declared = read_attribute(constraint, "capabilities")
    if declared is None:
        declared = read_attribute(constraint, "capability")
    if declared is None:
        return frozenset()
    if isinstance(declared, str):
        declared = (declared,)

    found: set[Capability] = set()
    try:
        for item in declared:
            if isinstance(item, Capability):
                found.add(item)
            elif isinstance(item, str) and item in Capability:
                found.add(Capability(item))
    except Exception:
        return frozenset()
    return frozenset(found)


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RuleComponent:
    """One declared constraint on a property, as it appears in a rule.

    ``message`` is the per-rule message from ``with_message()``: a literal
    string, or a callable that can only be evaluated during a validation
    pass. ``condition`` is the ``when()`` predicate, if any.
    """

    constraint: Any
    message: str | Callable[..., str] | None = None
    condition: Callable[[Any], bool] | None = None


class RuleDescriptor(Mapping[str, tuple[RuleComponent, ...]]):
    """Immutable property name → rule components table for one validator.

    Property names are unqualified (they belong to the validator's own
    model type). Repeated entries for the same property are merged in
    declaration order. Raw constraint objects are wrapped in a
    ``RuleComponent`` without a message.

    Usage::

        descriptor = RuleDescriptor({"email": [NotEmpty(), EmailAddress()]})
        for name, components in descriptor.members_with_validators():
            ...
    """

    __slots__ = ("_members",)

    def __init__(
        self,
        members: Mapping[str, Iterable[Any]] | Iterable[tuple[str, Iterable[Any]]] = (),
    ) -> None:
        pairs = members.items() if isinstance(members, Mapping) else members
        merged: dict[str, list[RuleComponent]] = {}
        for name, components in pairs:
            bucket = merged.setdefault(name, [])
            bucket.extend(_as_component(c) for c in components)
        object.__setattr__(
            self, "_members", {name: tuple(items) for name, items in merged.items()}
        )

    def __getitem__(self, key: str) -> tuple[RuleComponent, ...]:
        return self._members[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        names = ", ".join(repr(k) for k in self._members)
        return f"RuleDescriptor({names})"

    def members_with_validators(self) -> Iterator[tuple[str, tuple[RuleComponent, ...]]]:
        """Yield ``(property, components)`` for properties with at least one rule."""
        for name, components in self._members.items():
            if components:
                yield name, components


def _as_component(item: Any) -> RuleComponent:
    if isinstance(item, RuleComponent):
        return item
    return RuleComponent(item)
