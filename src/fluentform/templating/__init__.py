"""kida template integration.

Usage::

    from kida import Environment
    from fluentform.templating import install

    env = install(Environment(autoescape=True), engine)
    env.from_string(
        '<form{{ form | fluent_form }}>'
        '<input name="email"{{ form | val_attrs("email") }}>'
        "</form>"
    ).render({"form": engine.form(SignupModel)})
"""

from fluentform.templating.filters import BUILTIN_FILTERS, data_attrs, fluent_form, val_attrs
from fluentform.templating.integration import create_environment, install

__all__ = [
    "BUILTIN_FILTERS",
    "create_environment",
    "data_attrs",
    "fluent_form",
    "install",
    "val_attrs",
]
