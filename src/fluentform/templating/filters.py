"""Template filters for fluent-validated forms.

Registered on a kida Environment by ``fluentform.templating.integration``.
All filters return ``Markup`` with escaped values, so autoescaping does
not double-escape them.
"""

from collections.abc import Mapping
from typing import Any

from kida.template import Markup

from fluentform.rendering.attributes import format_attributes
from fluentform.rendering.forms import FluentForm


def fluent_form(form: Any) -> Markup | str:
    """Attributes for the ``<form>`` element; publishes the rule map.

    Example:
        <form method="post"{{ form | fluent_form }}>
        → <form method="post" data-fluent-validation="true">

    """
    if not isinstance(form, FluentForm):
        return ""
    return form.attrs()


def val_attrs(form: Any, path: str) -> Markup | str:
    """``data-val-*`` attributes for the field at *path*.

    Example:
        <input name="email"{{ form | val_attrs("email") }}>
        → <input name="email" data-val="true" data-val-required="...">

    """
    if not isinstance(form, FluentForm):
        return ""
    return form.field(path)


def data_attrs(attrs: Any) -> Markup | str:
    """Serialize an attribute dict (e.g. from ``field_attributes()``).

    Example:
        <select name="state"{{ state_attrs | data_attrs }}>

    """
    if not attrs or not isinstance(attrs, Mapping):
        return ""
    return format_attributes({str(k): str(v) for k, v in attrs.items()})


# All fluentform filters, registered by ``install()``.
BUILTIN_FILTERS: dict[str, Any] = {
    "data_attrs": data_attrs,
    "fluent_form": fluent_form,
    "val_attrs": val_attrs,
}
