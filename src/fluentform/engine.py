"""FluentEngine — wires resolver, extractor, builder and renderer together.

Create one engine per application at startup and share it across
threads; everything per-render lives in the ``RenderContext``::

    registry = ValidatorRegistry()
    registry.add(SignupValidator())
    registry.freeze()

    engine = FluentEngine(registry)

    # per request
    form = engine.form(SignupModel)
    html = template.render({"form": form})
"""

import logging

from fluentform._internal.types import FieldPath, ModelType
from fluentform.builder import RuleMap, RuleMapBuilder
from fluentform.cache import ConcurrentCache, DescriptorExtractor, ValidatorResolver
from fluentform.config import FluentConfig
from fluentform.constraints import RuleDescriptor
from fluentform.errors import ConfigurationError
from fluentform.registry import Registry
from fluentform.rendering.attributes import field_attributes
from fluentform.rendering.context import RenderContext, rules_key
from fluentform.rendering.forms import FluentForm

logger = logging.getLogger("fluentform.engine")


class FluentEngine:
    """Builds rule maps for model types and renders their attributes.

    The validator and descriptor caches may be injected (e.g. shared
    between engines, or fresh per test); by default each engine owns its
    own pair for the life of the process.
    """

    __slots__ = ("_builder", "_extractor", "_resolver", "config", "registry")

    def __init__(
        self,
        registry: Registry,
        config: FluentConfig | None = None,
        *,
        validator_cache: ConcurrentCache | None = None,
        descriptor_cache: ConcurrentCache[type, RuleDescriptor] | None = None,
    ) -> None:
        if not isinstance(registry, Registry):
            msg = f"{type(registry).__name__} has no lookup_validator(model_type) method"
            raise ConfigurationError(msg)
        self.registry = registry
        self.config = config or FluentConfig()
        self._resolver = ValidatorResolver(registry, validator_cache)
        self._extractor = DescriptorExtractor(descriptor_cache)
        self._builder = RuleMapBuilder(
            self._resolver,
            self._extractor,
            messages=self.config.messages,
            max_depth=self.config.max_depth,
        )

    @property
    def resolver(self) -> ValidatorResolver:
        return self._resolver

    @property
    def extractor(self) -> DescriptorExtractor:
        return self._extractor

    @property
    def builder(self) -> RuleMapBuilder:
        return self._builder

    def rules_key(self, model_type: ModelType) -> str:
        """Context key under which *model_type*'s rule map is published."""
        return rules_key(model_type, self.config.rules_key_prefix)

    def build_rules(self, model_type: ModelType) -> RuleMap | None:
        """Build the rule map for *model_type*.

        Returns ``None`` when no validator is registered for the type or
        the validator cannot describe its rules.
        """
        validator = self._resolver.resolve(model_type)
        if validator is None:
            return None
        descriptor = self._extractor.describe(validator)
        if descriptor is None:
            return None
        return self._builder.build(descriptor, model_type)

    def publish(self, context: RenderContext, model_type: ModelType) -> bool:
        """Build and publish *model_type*'s rule map into *context*.

        Returns True if a map was published (the form is fluent-validated).
        """
        rule_map = self.build_rules(model_type)
        if rule_map is None:
            return False
        context.publish(self.rules_key(model_type), rule_map)
        logger.debug(
            "Published %d validated fields for %s",
            len(rule_map),
            model_type.__qualname__,
        )
        return True

    def form_attributes(self, context: RenderContext, model_type: ModelType) -> dict[str, str]:
        """Publish the rule map and return the ``<form>`` marker attribute."""
        if not self.publish(context, model_type):
            return {}
        return {self.config.form_marker_attribute: "true"}

    def field_attributes(
        self,
        context: RenderContext,
        model_type: ModelType,
        path: FieldPath,
    ) -> dict[str, str]:
        """Attributes for the field at *path* of the form for *model_type*.

        Empty when no map was published for the model type or the field
        has no client-side rules.
        """
        return field_attributes(context.lookup(self.rules_key(model_type)), path)

    def form(self, model_type: ModelType, context: RenderContext | None = None) -> FluentForm:
        """Return a template-facing handle for one render of *model_type*."""
        return FluentForm(self, model_type, context)
