"""Wire attribute projection.

Turns the wire rules published for a field into the attributes the
client-side validator reads::

    data-val="true"
    data-val-length="Must be between 3 and 20 characters."
    data-val-length-min="3"
    data-val-length-max="20"

Attribute names and values must match the unobtrusive-validation schema
exactly.
"""

import html
from collections.abc import Iterable, Mapping
from typing import Any

from kida.template import Markup

from fluentform._internal.types import FieldPath
from fluentform.builder import RuleMap
from fluentform.mapping import WireRule

VALIDATION_FLAG = "data-val"


def stringify(value: Any) -> str:
    """Render a parameter value; ``None`` becomes an empty string."""
    if value is None:
        return ""
    return str(value)


def rule_attributes(rules: Iterable[WireRule]) -> dict[str, str]:
    """Project wire rules onto ``data-val-*`` attributes.

    Rules are applied in order; a later rule of the same kind overwrites
    the attributes of an earlier one. Returns an empty dict when there
    are no rules.
    """
    attrs: dict[str, str] = {}
    for rule in rules:
        if not attrs:
            attrs[VALIDATION_FLAG] = "true"
        name = f"{VALIDATION_FLAG}-{rule.kind}"
        attrs[name] = rule.message
        for param, value in rule.parameters.items():
            attrs[f"{name}-{param}"] = stringify(value)
    return attrs


def field_attributes(rule_map: RuleMap | None, path: FieldPath) -> dict[str, str]:
    """Attributes for the field at *path*, or ``{}`` when it has no rules."""
    if rule_map is None:
        return {}
    return rule_attributes(rule_map.rules_for(path))


def format_attributes(attrs: Mapping[str, str]) -> Markup:
    """Serialize attributes as `` name="value"`` pairs, HTML-escaped.

    Each pair carries a leading space so the result drops straight into a
    tag: ``<input name="email"{{ attrs }}>``.
    """
    return Markup(
        "".join(
            f' {html.escape(name, quote=True)}="{html.escape(value, quote=True)}"'
            for name, value in attrs.items()
        )
    )
