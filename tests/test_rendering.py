"""Tests for wire attributes, the render context and FluentForm."""

import threading

from sample_models import Address, Order, Product, UserRegistration

from fluentform.builder import RuleMap
from fluentform.engine import FluentEngine
from fluentform.mapping import RuleKind, WireRule
from fluentform.rendering import (
    FluentForm,
    RenderContext,
    field_attributes,
    format_attributes,
    rule_attributes,
    rules_key,
    stringify,
)

# ---------------------------------------------------------------------------
# Attribute projection
# ---------------------------------------------------------------------------


class TestRuleAttributes:
    def test_length_rule(self) -> None:
        rule = WireRule(RuleKind.LENGTH, "Must be between 3 and 20 characters.", {"min": 3, "max": 20})
        assert rule_attributes([rule]) == {
            "data-val": "true",
            "data-val-length": "Must be between 3 and 20 characters.",
            "data-val-length-min": "3",
            "data-val-length-max": "20",
        }

    def test_rules_in_order(self) -> None:
        rules = [
            WireRule(RuleKind.REQUIRED, "This field is required."),
            WireRule(RuleKind.EMAIL, "Please enter a valid email address."),
        ]
        assert list(rule_attributes(rules)) == ["data-val", "data-val-required", "data-val-email"]

    def test_same_kind_overwrites(self) -> None:
        rules = [
            WireRule(RuleKind.REGEX, "first", {"pattern": "a"}),
            WireRule(RuleKind.REGEX, "second", {"pattern": "b"}),
        ]
        attrs = rule_attributes(rules)
        assert attrs["data-val-regex"] == "second"
        assert attrs["data-val-regex-pattern"] == "b"

    def test_no_rules(self) -> None:
        assert rule_attributes([]) == {}

    def test_none_parameter(self) -> None:
        rule = WireRule(RuleKind.MIN, "Must be greater than .", {"min": None})
        assert rule_attributes([rule])["data-val-min-min"] == ""

    def test_stringify(self) -> None:
        assert stringify(None) == ""
        assert stringify(0) == "0"
        assert stringify(2.5) == "2.5"
        assert stringify("^\\d+$") == "^\\d+$"


class TestFieldAttributes:
    def test_found(self) -> None:
        rule_map = RuleMap([("Email", (WireRule(RuleKind.EMAIL, "Bad"),))])
        assert field_attributes(rule_map, "email") == {
            "data-val": "true",
            "data-val-email": "Bad",
        }

    def test_missing_path(self) -> None:
        assert field_attributes(RuleMap(), "email") == {}

    def test_no_map(self) -> None:
        assert field_attributes(None, "email") == {}


class TestFormatAttributes:
    def test_serializes_with_leading_space(self) -> None:
        html = format_attributes({"data-val": "true", "data-val-required": "Required"})
        assert str(html) == ' data-val="true" data-val-required="Required"'

    def test_escapes_values(self) -> None:
        html = str(format_attributes({"data-val-custom": 'Use "quotes" & <tags>'}))
        assert "&quot;quotes&quot;" in html
        assert "&amp;" in html
        assert "&lt;tags&gt;" in html

    def test_empty(self) -> None:
        assert str(format_attributes({})) == ""

    def test_returns_markup(self) -> None:
        assert hasattr(format_attributes({"a": "b"}), "__html__")


# ---------------------------------------------------------------------------
# Render context
# ---------------------------------------------------------------------------


class TestRenderContext:
    def test_rules_key(self) -> None:
        assert rules_key(Order) == "__FluentValidationRules_sample_models.Order"
        assert rules_key(Order, "custom") == "custom_sample_models.Order"

    def test_distinct_types_distinct_keys(self) -> None:
        assert rules_key(Order) != rules_key(Address)

    def test_publish_and_lookup(self) -> None:
        context = RenderContext()
        rule_map = RuleMap()
        context.publish("k", rule_map)
        assert context.lookup("k") is rule_map
        assert "k" in context

    def test_lookup_missing(self) -> None:
        assert RenderContext().lookup("k") is None

    def test_lookup_ignores_other_values(self) -> None:
        context = RenderContext()
        context.set("k", {"not": "a rule map"})
        assert context.lookup("k") is None
        assert context.get("k") == {"not": "a rule map"}


# ---------------------------------------------------------------------------
# FluentForm
# ---------------------------------------------------------------------------


class TestFluentForm:
    def test_form_attributes_publish(self, engine: FluentEngine) -> None:
        form = engine.form(UserRegistration)
        assert not form.published
        assert form.attributes() == {"data-fluent-validation": "true"}
        assert form.published

    def test_field_before_form_is_empty(self, engine: FluentEngine) -> None:
        form = engine.form(UserRegistration)
        assert form.field_attributes("email") == {}

    def test_field_attributes(self, engine: FluentEngine) -> None:
        form = engine.form(UserRegistration)
        form.attributes()
        assert form.field_attributes("age") == {
            "data-val": "true",
            "data-val-range": "Age must be between 18 and 120.",
            "data-val-range-min": "18",
            "data-val-range-max": "120",
        }

    def test_field_without_rules(self, engine: FluentEngine) -> None:
        form = engine.form(UserRegistration)
        form.attributes()
        assert form.field_attributes("confirm_password") == {}
        assert form.field_attributes("nickname") == {}

    def test_attributes_are_built_once(self, engine: FluentEngine, monkeypatch) -> None:
        form = engine.form(Product)
        calls: list[type] = []
        original = FluentEngine.form_attributes

        def spy(self: FluentEngine, context: RenderContext, model_type: type) -> dict[str, str]:
            calls.append(model_type)
            return original(self, context, model_type)

        monkeypatch.setattr(FluentEngine, "form_attributes", spy)
        form.attributes()
        form.attributes()
        assert calls == [Product]

    def test_markup_helpers(self, engine: FluentEngine) -> None:
        form = engine.form(Order)
        assert str(form.attrs()) == ' data-fluent-validation="true"'
        html = str(form.field("Shipping_Address.Street"))
        assert 'data-val="true"' in html
        assert 'data-val-required="Street is required."' in html
        assert 'data-val-maxlength-max="100"' in html

    def test_shared_context_holds_several_models(self, engine: FluentEngine) -> None:
        context = RenderContext()
        order_form = engine.form(Order, context)
        product_form = engine.form(Product, context)
        order_form.attributes()
        product_form.attributes()

        assert context.lookup(rules_key(Order)) is not None
        assert context.lookup(rules_key(Product)) is not None
        assert "data-val-regex" in product_form.field_attributes("sku")
        assert product_form.field_attributes("order_number") == {}

    def test_repr(self, engine: FluentEngine) -> None:
        assert repr(engine.form(Order)) == "<FluentForm Order>"

    def test_is_fluent_form(self, engine: FluentEngine) -> None:
        assert isinstance(engine.form(Order), FluentForm)


class TestConcurrentRenders:
    def test_threads_render_independently(self, engine: FluentEngine) -> None:
        results: list[dict[str, str]] = []
        lock = threading.Lock()
        barrier = threading.Barrier(6)

        def render() -> None:
            barrier.wait()
            form = engine.form(UserRegistration)
            form.attributes()
            attrs = form.field_attributes("username")
            with lock:
                results.append(attrs)

        threads = [threading.Thread(target=render) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 6
        assert all(r == results[0] for r in results)
        assert results[0]["data-val-length-min"] == "3"
