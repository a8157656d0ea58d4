"""Tests for ModelValidator and the fluent RuleBuilder."""

import pytest
from sample_models import (
    Address,
    AddressValidator,
    Order,
    OrderValidator,
    UserRegistrationValidator,
)

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
    NotEmpty,
    NotNull,
    Predicate,
    RegularExpression,
)
from fluentform.validator import ModelValidator, RuleBuilder


class TestModelType:
    def test_bound_from_generic_parameter(self) -> None:
        assert AddressValidator.model_type is Address
        assert OrderValidator.model_type is Order

    def test_inherited_by_subclasses(self) -> None:
        class StrictAddressValidator(AddressValidator):
            pass

        assert StrictAddressValidator.model_type is Address

    def test_unbound_base(self) -> None:
        assert ModelValidator.model_type is None

    def test_repr(self) -> None:
        assert repr(AddressValidator()) == "<AddressValidator for Address>"


class TestDescribeRules:
    def test_groups_by_property_in_declaration_order(self) -> None:
        descriptor = UserRegistrationValidator().describe_rules()
        assert list(descriptor) == [
            "username",
            "email",
            "password",
            "confirm_password",
            "age",
            "phone_number",
            "website",
        ]
        assert [type(c.constraint) for c in descriptor["email"]] == [NotEmpty, EmailAddress]

    def test_repeated_rule_for_merges(self) -> None:
        class V(ModelValidator[Address]):
            def __init__(self) -> None:
                super().__init__()
                self.rule_for("street").not_empty()
                self.rule_for("city").not_empty()
                self.rule_for("street").max_length(10)

        descriptor = V().describe_rules()
        assert list(descriptor) == ["street", "city"]
        assert len(descriptor["street"]) == 2

    def test_child_validator_component(self) -> None:
        descriptor = OrderValidator().describe_rules()
        (component,) = descriptor["shipping_address"]
        assert isinstance(component.constraint, ChildValidator)
        assert isinstance(component.constraint.validator, AddressValidator)


class TestRuleBuilder:
    def test_constraint_methods(self) -> None:
        builder = (
            RuleBuilder("x")
            .not_null()
            .matches(r"\d+")
            .credit_card()
            .inclusive_between(1, 5)
            .exclusive_between(0, 6)
            .must(bool)
            .custom(print)
        )
        assert [type(c.constraint) for c in builder.components] == [
            NotNull,
            RegularExpression,
            CreditCard,
            InclusiveBetween,
            ExclusiveBetween,
            Predicate,
            CustomConstraint,
        ]

    def test_length_exact_when_max_omitted(self) -> None:
        (component,) = RuleBuilder("state").length(2).components
        assert component.constraint == Length(2, 2)

    def test_length_range(self) -> None:
        (component,) = RuleBuilder("name").length(3, 20).components
        assert component.constraint == Length(3, 20)

    def test_comparisons(self) -> None:
        builder = (
            RuleBuilder("n")
            .greater_than(1)
            .greater_than_or_equal(2)
            .less_than(3)
            .less_than_or_equal(4)
            .equal(5)
            .not_equal(6)
        )
        assert [c.constraint for c in builder.components] == [
            Compare(Comparison.GREATER_THAN, 1),
            Compare(Comparison.GREATER_THAN_OR_EQUAL, 2),
            Compare(Comparison.LESS_THAN, 3),
            Compare(Comparison.LESS_THAN_OR_EQUAL, 4),
            Compare(Comparison.EQUAL, 5),
            Compare(Comparison.NOT_EQUAL, 6),
        ]

    def test_with_message_applies_to_last_component(self) -> None:
        builder = RuleBuilder("email").not_empty().email().with_message("Bad email")
        first, second = builder.components
        assert first.message is None
        assert second.message == "Bad email"

    def test_with_message_accepts_callable(self) -> None:
        builder = RuleBuilder("email").email().with_message(lambda model: "later")
        assert callable(builder.components[0].message)

    def test_with_message_before_constraint(self) -> None:
        with pytest.raises(ValueError, match="before any constraint"):
            RuleBuilder("email").with_message("nope")

    def test_when_applies_to_preceding_components(self) -> None:
        builder = RuleBuilder("website").not_empty().matches("x").when(bool).max_length(5)
        first, second, third = builder.components
        assert first.condition is bool
        assert second.condition is bool
        assert third.condition is None
