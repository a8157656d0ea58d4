"""Template-facing form handle.

``FluentForm`` pairs one root model type with one ``RenderContext``. The
``<form>`` element asks it for its attributes first, which builds and
publishes the rule map; every field rendered afterwards reads from that
map::

    form = engine.form(SignupModel)
    # <form method="post"{{ form.attrs() }}>
    #   <input name="email"{{ form.field("email") }}>
"""

from typing import TYPE_CHECKING

from kida.template import Markup

from fluentform._internal.types import FieldPath, ModelType
from fluentform.rendering.attributes import format_attributes
from fluentform.rendering.context import RenderContext

if TYPE_CHECKING:
    from fluentform.engine import FluentEngine


class FluentForm:
    """Form-level and field-level attributes for one render of one model type."""

    __slots__ = ("_engine", "_form_attrs", "context", "model_type")

    def __init__(
        self,
        engine: FluentEngine,
        model_type: ModelType,
        context: RenderContext | None = None,
    ) -> None:
        self._engine = engine
        self.model_type = model_type
        self.context = context if context is not None else RenderContext()
        self._form_attrs: dict[str, str] | None = None

    @property
    def published(self) -> bool:
        """True once the rule map for ``model_type`` is in the context."""
        return self.context.lookup(self._engine.rules_key(self.model_type)) is not None

    def attributes(self) -> dict[str, str]:
        """Attributes for the ``<form>`` element.

        The first call builds and publishes the rule map; later calls
        return the same result without rebuilding.
        """
        if self._form_attrs is None:
            self._form_attrs = self._engine.form_attributes(self.context, self.model_type)
        return dict(self._form_attrs)

    def field_attributes(self, path: FieldPath) -> dict[str, str]:
        """Attributes for the field at *path*; empty until the form is published."""
        return self._engine.field_attributes(self.context, self.model_type, path)

    def attrs(self) -> Markup:
        """``attributes()`` serialized for direct use inside a tag."""
        return format_attributes(self.attributes())

    def field(self, path: FieldPath) -> Markup:
        """``field_attributes()`` serialized for direct use inside a tag."""
        return format_attributes(self.field_attributes(path))

    def __repr__(self) -> str:
        return f"<FluentForm {self.model_type.__qualname__}>"
