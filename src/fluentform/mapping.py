"""Constraint classification — one rule component in, one wire rule out.

``classify()`` walks an ordered table of capability predicates. The first
entry whose predicate matches builds the ``WireRule``; narrower
capabilities come before the general ones they specialize (a maximum
length is also a length). Constraints with no client-side equivalent
produce ``None``.

Messages come from, in order:

1. a literal string attached to the rule with ``with_message()``
2. a string ``error_message_source`` on the constraint itself
3. the kind's default (overridable per kind)

Deferred (callable) messages need a validation pass to evaluate and are
skipped.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from fluentform.constraints import (
    Capability,
    Comparison,
    RuleComponent,
    capabilities_of,
    read_attribute,
)


class RuleKind(StrEnum):
    """Client-side rule kinds; the value is the ``data-val-<kind>`` suffix."""

    REQUIRED = "required"
    EMAIL = "email"
    LENGTH = "length"
    MAXLENGTH = "maxlength"
    MINLENGTH = "minlength"
    RANGE = "range"
    MIN = "min"
    MAX = "max"
    REGEX = "regex"
    CREDITCARD = "creditcard"
    CUSTOM = "custom"


DEFAULT_MESSAGES: Mapping[RuleKind, str] = {
    RuleKind.REQUIRED: "This field is required.",
    RuleKind.EMAIL: "Please enter a valid email address.",
    RuleKind.LENGTH: "Must be between {min} and {max} characters.",
    RuleKind.MAXLENGTH: "Must not exceed {max} characters.",
    RuleKind.MINLENGTH: "Must be at least {min} characters.",
    RuleKind.RANGE: "Must be between {min} and {max}.",
    RuleKind.MIN: "Must be greater than {min}.",
    RuleKind.MAX: "Must be less than {max}.",
    RuleKind.REGEX: "Invalid format.",
    RuleKind.CREDITCARD: "Please enter a valid credit card number.",
    RuleKind.CUSTOM: "Invalid value.",
}


@dataclass(frozen=True, slots=True)
class WireRule:
    """A normalized client-side rule.

    ``parameters`` hold primitives (numbers, strings) or ``None``; they
    become ``data-val-<kind>-<name>`` attributes. They are stored
    read-only, so a published rule map cannot be changed through its rules.
    """

    kind: RuleKind
    message: str
    parameters: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def __hash__(self) -> int:
        return hash((self.kind, self.message, frozenset(self.parameters.items())))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": str(self.kind),
            "message": self.message,
            "parameters": dict(self.parameters),
        }


# ---------------------------------------------------------------------------
# Message lookup
# ---------------------------------------------------------------------------


def resolve_message(component: RuleComponent) -> str | None:
    """Return the literal message configured for *component*, if any.

    Never raises: a failing adapter property counts as "no message".
    """
    try:
        message = getattr(component, "message", None)
        if isinstance(message, str):
            return message

        source = getattr(component.constraint, "error_message_source", None)
        if isinstance(source, str):
            return source
    except Exception:
        return None
    return None


def _default_message(
    kind: RuleKind,
    overrides: Mapping[str, str] | None,
    **params: Any,
) -> str:
    template = DEFAULT_MESSAGES[kind]
    if overrides:
        template = overrides.get(str(kind), template)
    try:
        return template.format(**params)
    except (KeyError, IndexError, ValueError):
        return template


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

type _Builder = Callable[[Any, str | None, Mapping[str, str] | None], WireRule | None]


def _rule(
    kind: RuleKind,
    message: str | None,
    overrides: Mapping[str, str] | None,
    **params: Any,
) -> WireRule:
    text = message if message is not None else _default_message(kind, overrides, **params)
    return WireRule(kind=kind, message=text, parameters=params)


def _required(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule:
    return _rule(RuleKind.REQUIRED, message, overrides)


def _email(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule:
    return _rule(RuleKind.EMAIL, message, overrides)


def _maxlength(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule:
    return _rule(RuleKind.MAXLENGTH, message, overrides, max=read_attribute(c, "max"))


def _minlength(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule:
    return _rule(RuleKind.MINLENGTH, message, overrides, min=read_attribute(c, "min"))


def _length(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule:
    return _rule(
        RuleKind.LENGTH,
        message,
        overrides,
        min=read_attribute(c, "min"),
        max=read_attribute(c, "max"),
    )


def _range(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule:
    return _rule(
        RuleKind.RANGE,
        message,
        overrides,
        min=read_attribute(c, "min"),
        max=read_attribute(c, "max"),
    )


_LOWER_BOUNDS = frozenset({Comparison.GREATER_THAN, Comparison.GREATER_THAN_OR_EQUAL})
_UPPER_BOUNDS = frozenset({Comparison.LESS_THAN, Comparison.LESS_THAN_OR_EQUAL})


def _comparison(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule | None:
    comparison = read_attribute(c, "comparison")
    value = read_attribute(c, "value")
    if comparison in _LOWER_BOUNDS:
        return _rule(RuleKind.MIN, message, overrides, min=value)
    if comparison in _UPPER_BOUNDS:
        return _rule(RuleKind.MAX, message, overrides, max=value)
    # equal / not equal have no client-side counterpart
    return None


def _regex(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule:
    return _rule(RuleKind.REGEX, message, overrides, pattern=read_attribute(c, "pattern"))


def _creditcard(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule:
    return _rule(RuleKind.CREDITCARD, message, overrides)


def _custom(c: Any, message: str | None, overrides: Mapping[str, str] | None) -> WireRule:
    return _rule(RuleKind.CUSTOM, message, overrides)


def _has(*wanted: Capability) -> Callable[[Any, frozenset[Capability]], bool]:
    def check(constraint: Any, caps: frozenset[Capability]) -> bool:
        return not caps.isdisjoint(wanted)

    return check


def is_custom(constraint: Any, caps: frozenset[Capability] | None = None) -> bool:
    """Heuristic for programmatic constraints with no declarative shape."""
    if caps is None:
        caps = capabilities_of(constraint)
    if Capability.CUSTOM in caps or Capability.PREDICATE in caps:
        return True
    cls = type(constraint)
    if "Custom" in cls.__name__ or "Predicate" in cls.__name__:
        return True
    return any("CustomValidator" in base.__name__ for base in cls.__mro__[1:])


# Order matters: first match wins.
_DISPATCH: tuple[tuple[Callable[[Any, frozenset[Capability]], bool], _Builder], ...] = (
    (_has(Capability.NOT_NULL, Capability.NOT_EMPTY), _required),
    (_has(Capability.EMAIL), _email),
    (_has(Capability.MAX_LENGTH), _maxlength),
    (_has(Capability.MIN_LENGTH), _minlength),
    (_has(Capability.LENGTH), _length),
    (_has(Capability.INCLUSIVE_BETWEEN, Capability.EXCLUSIVE_BETWEEN), _range),
    (_has(Capability.COMPARISON), _comparison),
    (_has(Capability.REGEX), _regex),
    (_has(Capability.CREDIT_CARD), _creditcard),
    (is_custom, _custom),
)


def classify(
    component: RuleComponent | Any,
    messages: Mapping[str, str] | None = None,
) -> WireRule | None:
    """Map one rule component (or bare constraint) to a ``WireRule``.

    Args:
        component: A ``RuleComponent``, or a constraint adapter with no
            per-rule message.
        messages: Per-kind default message overrides, keyed by the kind's
            string value.

    Returns:
        The wire rule, or ``None`` when the constraint has no client-side
        equivalent.
    """
    if not isinstance(component, RuleComponent):
        component = RuleComponent(component)

    constraint = component.constraint
    caps = capabilities_of(constraint)
    for matches, build in _DISPATCH:
        if matches(constraint, caps):
            return build(constraint, resolve_message(component), messages)
    return None
