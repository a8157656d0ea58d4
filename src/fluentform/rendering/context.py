"""Per-render context — where a form publishes its rule map.

One ``RenderContext`` lives for exactly one render (one request, one
page). It is passed explicitly through the render call tree, never stored
in a thread-local or module global, so concurrent renders cannot see each
other's maps.
"""

from typing import Any

from fluentform._internal.types import ModelType
from fluentform.builder import RuleMap

RULES_KEY_PREFIX = "__FluentValidationRules"


def rules_key(model_type: ModelType, prefix: str = RULES_KEY_PREFIX) -> str:
    """Return the context key for *model_type*'s rule map.

    Derived from the fully qualified type name so several root model
    types can publish into the same render::

        rules_key(Order)  # "__FluentValidationRules_shop.models.Order"
    """
    return f"{prefix}_{model_type.__module__}.{model_type.__qualname__}"


class RenderContext:
    """A mutable namespace scoped to a single render.

    Rule maps are published once by the form and then only read by the
    fields rendered inside it. Other per-render values can share the
    namespace through ``set``/``get``.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: dict[str, Any] = {}

    def publish(self, key: str, rule_map: RuleMap) -> None:
        """Store *rule_map* under *key*, replacing any earlier map."""
        self._items[key] = rule_map

    def lookup(self, key: str) -> RuleMap | None:
        """Return the rule map published under *key*, or ``None``."""
        value = self._items.get(key)
        return value if isinstance(value, RuleMap) else None

    def set(self, key: str, value: Any) -> None:
        self._items[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._items.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __repr__(self) -> str:
        return f"<RenderContext {sorted(self._items)!r}>"
