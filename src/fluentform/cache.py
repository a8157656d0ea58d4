"""Process-wide caches for validator resolution and rule descriptors.

Both lookups are pure functions of their key for the life of the process,
so the caches are never evicted. They are shared by every thread that
renders forms.

Free-threading safety:
    - Reads go straight to the dict (no lock on the hot path)
    - Computation happens outside the lock
    - Inserts use ``dict.setdefault`` under a lock; first write wins, so
      two threads computing the same key agree on one value
"""

import logging
import threading
from collections.abc import Callable, Hashable, Mapping
from typing import Any

from fluentform._internal.types import ModelType
from fluentform.constraints import RuleDescriptor
from fluentform.registry import Registry

logger = logging.getLogger("fluentform.engine")


class ConcurrentCache[K: Hashable, V]:
    """Thread-safe get-or-compute store with no eviction.

    ``None`` results are returned but never stored, so a miss is
    recomputed on the next call.
    """

    __slots__ = ("_data", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[K, V] = {}

    def get(self, key: K) -> V | None:
        return self._data.get(key)

    def get_or_compute(self, key: K, compute: Callable[[K], V | None]) -> V | None:
        """Return the cached value for *key*, computing and storing it on first use."""
        value = self._data.get(key)
        if value is not None:
            return value

        computed = compute(key)
        if computed is None:
            return None

        with self._lock:
            return self._data.setdefault(key, computed)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class ValidatorResolver:
    """Model type → validator, memoized on success.

    A registry miss is not cached: it is expected to be rare (usually a
    configuration error) and a validator registered late must still be
    found.
    """

    __slots__ = ("_cache", "_registry")

    def __init__(
        self,
        registry: Registry,
        cache: ConcurrentCache[ModelType, Any] | None = None,
    ) -> None:
        self._registry = registry
        self._cache: ConcurrentCache[ModelType, Any] = cache if cache is not None else ConcurrentCache()

    def resolve(self, model_type: ModelType) -> Any | None:
        validator = self._cache.get_or_compute(model_type, self._registry.lookup_validator)
        if validator is None:
            logger.debug("No validator registered for %s", _type_name(model_type))
        return validator


class DescriptorExtractor:
    """Validator → ``RuleDescriptor``, memoized per validator class.

    Keyed by the validator's concrete class rather than the model type:
    the descriptor depends only on the rules the validator declares.
    """

    __slots__ = ("_cache",)

    def __init__(self, cache: ConcurrentCache[type, RuleDescriptor] | None = None) -> None:
        self._cache: ConcurrentCache[type, RuleDescriptor] = (
            cache if cache is not None else ConcurrentCache()
        )

    def describe(self, validator: Any) -> RuleDescriptor | None:
        """Return the validator's descriptor, or ``None`` if it cannot describe itself."""
        if validator is None:
            return None
        return self._cache.get_or_compute(type(validator), lambda _: _introspect(validator))


def _introspect(validator: Any) -> RuleDescriptor | None:
    describe_rules = getattr(validator, "describe_rules", None)
    if not callable(describe_rules):
        logger.debug("%s does not expose describe_rules()", type(validator).__qualname__)
        return None

    try:
        described = describe_rules()
    except Exception:
        logger.warning(
            "describe_rules() failed for %s; rendering without its rules",
            type(validator).__qualname__,
            exc_info=True,
        )
        return None

    if described is None or isinstance(described, RuleDescriptor):
        return described
    if isinstance(described, Mapping):
        return RuleDescriptor(described)

    logger.warning(
        "describe_rules() on %s returned %s, expected a RuleDescriptor",
        type(validator).__qualname__,
        type(described).__name__,
    )
    return None


def _type_name(tp: Any) -> str:
    return getattr(tp, "__qualname__", repr(tp))
