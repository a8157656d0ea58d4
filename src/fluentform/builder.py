"""Rule map builder — walks a model graph into a path → rules table.

For each property of the root validator's descriptor the builder records
the classified wire rules under the property's dotted path, then descends
into properties whose declared type is a complex object with its own
validator. Traversal is depth-first, pre-order; a child's entries
overwrite an equal path (compared case-insensitively) recorded earlier.

Self-referential graphs (``Node.parent: Node``) stop at the first repeat
of a type on the current ancestor chain. Sibling properties sharing a type
(``shipping_address`` and ``billing_address``) are each expanded.
``max_depth`` bounds the nesting regardless.
"""

import logging
from collections.abc import Mapping
from typing import Any

from fluentform._internal.casemap import CaseInsensitiveMapping
from fluentform._internal.types import FieldPath, ModelType
from fluentform.cache import DescriptorExtractor, ValidatorResolver
from fluentform.constraints import RuleDescriptor
from fluentform.introspection import is_complex, property_type, unwrap_optional
from fluentform.mapping import WireRule, classify

logger = logging.getLogger("fluentform.rules")


class RuleMap(CaseInsensitiveMapping[tuple[WireRule, ...]]):
    """Field path → wire rules for one model graph.

    Built once per render and read-only afterwards. Lookups ignore case,
    so ``rule_map["Username"]`` and ``rule_map["username"]`` agree.
    """

    __slots__ = ()

    def rules_for(self, path: FieldPath) -> tuple[WireRule, ...]:
        """Return the rules at *path*, or an empty tuple."""
        return self.get(path, ())


def join_path(prefix: str, name: str) -> FieldPath:
    """Join a path prefix and a property name (``"a" + "b" → "a.b"``)."""
    return f"{prefix}.{name}" if prefix else name


class RuleMapBuilder:
    """Builds ``RuleMap`` instances from rule descriptors.

    Resolution and introspection of nested validators go through the
    shared resolver and extractor, so repeated builds are cheap.
    """

    __slots__ = ("_extractor", "_max_depth", "_messages", "_resolver")

    def __init__(
        self,
        resolver: ValidatorResolver,
        extractor: DescriptorExtractor,
        *,
        messages: Mapping[str, str] | None = None,
        max_depth: int = 16,
    ) -> None:
        self._resolver = resolver
        self._extractor = extractor
        self._messages = messages
        self._max_depth = max_depth

    def build(
        self,
        descriptor: RuleDescriptor,
        model_type: ModelType,
        prefix: str = "",
    ) -> RuleMap:
        """Build the rule map for *model_type* and everything nested under it.

        Args:
            descriptor: The root validator's descriptor.
            model_type: The type the descriptor describes; its declared
                property types drive nested expansion.
            prefix: Path prefix for every entry (empty at the root).
        """
        entries: list[tuple[FieldPath, tuple[WireRule, ...]]] = []
        self._walk(descriptor, model_type, prefix, (model_type,), entries)
        return RuleMap(entries)

    def _walk(
        self,
        descriptor: RuleDescriptor,
        model_type: ModelType,
        prefix: str,
        ancestors: tuple[ModelType, ...],
        entries: list[tuple[FieldPath, tuple[WireRule, ...]]],
    ) -> None:
        for name, components in descriptor.members_with_validators():
            path = join_path(prefix, name)

            rules = tuple(
                rule
                for rule in (classify(c, self._messages) for c in components)
                if rule is not None
            )
            if rules:
                entries.append((path, rules))

            nested_type = self._nested_type(model_type, name)
            if nested_type is None:
                continue

            if nested_type in ancestors:
                logger.debug("Not expanding %s: %r repeats an enclosing type", path, nested_type)
                continue
            if len(ancestors) > self._max_depth:
                logger.debug("Not expanding %s: nesting deeper than %d", path, self._max_depth)
                continue

            validator = self._resolver.resolve(nested_type)
            if validator is None:
                continue
            nested = self._extractor.describe(validator)
            if nested is None:
                continue

            self._walk(nested, nested_type, path, (*ancestors, nested_type), entries)

    @staticmethod
    def _nested_type(model_type: ModelType, name: str) -> Any | None:
        declared = property_type(model_type, name)
        if declared is None or not is_complex(declared):
            return None
        return unwrap_optional(declared)
