"""Declarative model validators.

A ``ModelValidator`` is bound to one model type through its generic
parameter and declares rules per property with a fluent builder::

    class AddressValidator(ModelValidator[Address]):
        def __init__(self) -> None:
            super().__init__()
            self.rule_for("street").not_empty().with_message("Street is required.")
            self.rule_for("zip_code").matches(r"^\\d{5}$")

The validator never validates anything here. Its only job toward the
engine is ``describe_rules()``, which returns the ``RuleDescriptor`` the
rule map builder walks.
"""

import types
from collections.abc import Callable
from dataclasses import replace
from typing import Any, ClassVar, get_args, get_origin

from fluentform.constraints import (
    ChildValidator,
    Compare,
    Comparison,
    CreditCard,
    CustomConstraint,
    EmailAddress,
    ExclusiveBetween,
    InclusiveBetween,
    Length,
    MaximumLength,
    MinimumLength,
    NotEmpty,
    NotNull,
    Predicate,
    RegularExpression,
    RuleComponent,
    RuleDescriptor,
)


class RuleBuilder:
    """Fluent chain for the constraints of a single property.

    Each constraint method appends a component and returns the builder.
    ``with_message()`` applies to the most recent component; ``when()``
    applies to every component declared so far on this rule.
    """

    __slots__ = ("_components", "property_name")

    def __init__(self, property_name: str) -> None:
        self.property_name = property_name
        self._components: list[RuleComponent] = []

    @property
    def components(self) -> tuple[RuleComponent, ...]:
        return tuple(self._components)

    def _add(self, constraint: Any) -> RuleBuilder:
        self._components.append(RuleComponent(constraint))
        return self

    # -- Presence --

    def not_null(self) -> RuleBuilder:
        return self._add(NotNull())

    def not_empty(self) -> RuleBuilder:
        return self._add(NotEmpty())

    # -- Format --

    def email(self) -> RuleBuilder:
        return self._add(EmailAddress())

    def matches(self, pattern: str) -> RuleBuilder:
        return self._add(RegularExpression(pattern))

    def credit_card(self) -> RuleBuilder:
        return self._add(CreditCard())

    # -- Length --

    def length(self, min: int, max: int | None = None) -> RuleBuilder:
        """Length between *min* and *max*, or exactly *min* when *max* is omitted."""
        return self._add(Length(min, min if max is None else max))

    def max_length(self, n: int) -> RuleBuilder:
        return self._add(MaximumLength(n))

    def min_length(self, n: int) -> RuleBuilder:
        return self._add(MinimumLength(n))

    # -- Range and comparison --

    def inclusive_between(self, low: Any, high: Any) -> RuleBuilder:
        return self._add(InclusiveBetween(low, high))

    def exclusive_between(self, low: Any, high: Any) -> RuleBuilder:
        return self._add(ExclusiveBetween(low, high))

    def greater_than(self, value: Any) -> RuleBuilder:
        return self._add(Compare(Comparison.GREATER_THAN, value))

    def greater_than_or_equal(self, value: Any) -> RuleBuilder:
        return self._add(Compare(Comparison.GREATER_THAN_OR_EQUAL, value))

    def less_than(self, value: Any) -> RuleBuilder:
        return self._add(Compare(Comparison.LESS_THAN, value))

    def less_than_or_equal(self, value: Any) -> RuleBuilder:
        return self._add(Compare(Comparison.LESS_THAN_OR_EQUAL, value))

    def equal(self, value: Any) -> RuleBuilder:
        return self._add(Compare(Comparison.EQUAL, value))

    def not_equal(self, value: Any) -> RuleBuilder:
        return self._add(Compare(Comparison.NOT_EQUAL, value))

    # -- Programmatic --

    def must(self, predicate: Callable[[Any], bool]) -> RuleBuilder:
        return self._add(Predicate(predicate))

    def custom(self, func: Callable[..., Any]) -> RuleBuilder:
        return self._add(CustomConstraint(func))

    def set_validator(self, validator: Any) -> RuleBuilder:
        return self._add(ChildValidator(validator))

    # -- Modifiers --

    def with_message(self, message: str | Callable[..., str]) -> RuleBuilder:
        """Set the message of the most recently declared constraint.

        Callables are accepted for parity with server-side validation but
        are never evaluated while building client rules.
        """
        if not self._components:
            msg = f"with_message() on {self.property_name!r} before any constraint"
            raise ValueError(msg)
        self._components[-1] = replace(self._components[-1], message=message)
        return self

    def when(self, condition: Callable[[Any], bool]) -> RuleBuilder:
        """Make every constraint declared so far conditional."""
        self._components = [replace(c, condition=condition) for c in self._components]
        return self


class ModelValidator[T]:
    """Base class for validators bound to a single model type.

    The model type is read from the generic parameter when the subclass
    is created and stored on ``model_type``::

        class UserValidator(ModelValidator[User]): ...
        UserValidator.model_type  # User
    """

    model_type: ClassVar[type | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in types.get_original_bases(cls):
            if get_origin(base) is ModelValidator:
                args = get_args(base)
                if args and isinstance(args[0], type):
                    cls.model_type = args[0]
                break

    def __init__(self) -> None:
        self._rules: list[RuleBuilder] = []

    def rule_for(self, property_name: str) -> RuleBuilder:
        """Start declaring constraints for *property_name*."""
        builder = RuleBuilder(property_name)
        self._rules.append(builder)
        return builder

    def describe_rules(self) -> RuleDescriptor:
        """Return the declared constraints grouped by property."""
        return RuleDescriptor((rule.property_name, rule.components) for rule in self._rules)

    def __repr__(self) -> str:
        model = self.model_type.__name__ if self.model_type is not None else "?"
        return f"<{type(self).__name__} for {model}>"
