"""fluentform — declarative validators rendered as client-side rules.

Turns the constraints a model validator declares into the ``data-val-*``
attributes that unobtrusive client-side validation reads, including
nested objects addressed by dotted paths.

Basic usage::

    from fluentform import FluentEngine, ModelValidator, ValidatorRegistry

    class SignupValidator(ModelValidator[Signup]):
        def __init__(self) -> None:
            super().__init__()
            self.rule_for("email").not_empty().email()
            self.rule_for("username").length(3, 20)

    registry = ValidatorRegistry()
    registry.add(SignupValidator())
    engine = FluentEngine(registry)

    form = engine.form(Signup)
    form.attributes()               # {"data-fluent-validation": "true"}
    form.field_attributes("email")  # {"data-val": "true", "data-val-required": ...}

Template integration (kida)::

    from fluentform.templating import install
    install(env, engine)
    # <input name="email"{{ form | val_attrs("email") }}>
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "FluentConfig",
    "FluentEngine",
    "FluentForm",
    "FluentFormError",
    "ModelValidator",
    "RenderContext",
    "RuleDescriptor",
    "RuleKind",
    "RuleMap",
    "ValidatorRegistry",
    "WireRule",
    "classify",
    "is_complex",
    "rules_key",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import fluentform`` fast while providing a clean top-level API.
    """
    if name == "FluentEngine":
        from fluentform.engine import FluentEngine

        return FluentEngine

    if name == "FluentConfig":
        from fluentform.config import FluentConfig

        return FluentConfig

    if name == "ModelValidator":
        from fluentform.validator import ModelValidator

        return ModelValidator

    if name == "ValidatorRegistry":
        from fluentform.registry import ValidatorRegistry

        return ValidatorRegistry

    if name == "RuleDescriptor":
        from fluentform.constraints import RuleDescriptor

        return RuleDescriptor

    if name in ("RuleKind", "WireRule", "classify"):
        from fluentform import mapping as _mapping

        return getattr(_mapping, name)

    if name == "RuleMap":
        from fluentform.builder import RuleMap

        return RuleMap

    if name == "is_complex":
        from fluentform.introspection import is_complex

        return is_complex

    if name in ("FluentForm", "RenderContext", "rules_key"):
        from fluentform import rendering as _rendering

        return getattr(_rendering, name)

    if name in ("ConfigurationError", "FluentFormError"):
        from fluentform import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
