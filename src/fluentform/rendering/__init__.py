"""Rendering side of the engine — render context, wire attributes, forms.

Usage::

    from fluentform.rendering import RenderContext, field_attributes, rules_key

    context = RenderContext()
    engine.publish(context, OrderModel)
    rule_map = context.lookup(rules_key(OrderModel))
    field_attributes(rule_map, "shipping_address.street")
    # {"data-val": "true", "data-val-required": "Street is required.", ...}
"""

from fluentform.rendering.attributes import (
    VALIDATION_FLAG,
    field_attributes,
    format_attributes,
    rule_attributes,
    stringify,
)
from fluentform.rendering.context import RULES_KEY_PREFIX, RenderContext, rules_key
from fluentform.rendering.forms import FluentForm

__all__ = [
    "RULES_KEY_PREFIX",
    "VALIDATION_FLAG",
    "FluentForm",
    "RenderContext",
    "field_attributes",
    "format_attributes",
    "rule_attributes",
    "rules_key",
    "stringify",
]
