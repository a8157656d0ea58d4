"""Property type lookup and leaf/complex classification.

The rule map builder only descends into a property when its declared type
is a *complex* object: something that may carry its own validator. Scalars,
dates, identifiers, enums and every kind of collection are leaves.
"""

import datetime
import decimal
import enum
import fractions
import inspect
import logging
import types
import uuid
from collections.abc import Iterable
from typing import Any, Literal, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger("fluentform.rules")

# Scalar leaf types. Subclasses count too (bool is an int, datetime a date).
_LEAF_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    decimal.Decimal,
    fractions.Fraction,
    enum.Enum,
)


def is_complex(tp: Any) -> bool:
    """Return True if *tp* is a nested object type worth expanding.

    ``X | None`` is classified by ``X``. Generic aliases (``list[Address]``)
    and any iterable class are collections, hence leaves. Anything that is
    not a class (``Any``, type variables, multi-type unions) is a leaf.
    """
    tp = unwrap_optional(tp)
    if tp is Any:
        return False

    origin = get_origin(tp)
    if origin is Literal or origin is Union or origin is types.UnionType:
        return False

    # Parameterized generics: list[X], dict[K, V], Sequence[X], ...
    if origin is not None:
        return isinstance(origin, type) and not _is_leaf_class(origin)

    if not isinstance(tp, type):
        return False
    return not _is_leaf_class(tp)


def _is_leaf_class(cls: type) -> bool:
    if issubclass(cls, _LEAF_TYPES):
        return True
    return issubclass(cls, Iterable)


def unwrap_optional(tp: Any) -> Any:
    """Extract ``X`` from ``X | None`` / ``Optional[X]``; other types pass through."""
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def property_type(model_type: type, name: str) -> Any | None:
    """Return the declared type of property *name* on *model_type*.

    Looks at resolved type hints first (dataclasses, annotated classes,
    pydantic-style models), then at the return annotation of a
    ``@property``. Returns ``None`` when nothing usable is declared or the
    annotation cannot be evaluated.
    """
    hints = _type_hints(model_type)
    if name in hints:
        return hints[name]

    try:
        attr = inspect.getattr_static(model_type, name, None)
        if isinstance(attr, property) and attr.fget is not None:
            return get_type_hints(attr.fget).get("return")
    except Exception:
        logger.debug("Unreadable annotation for %s.%s", _qualname(model_type), name, exc_info=True)
    return None


def _type_hints(model_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(model_type)
    except Exception:
        pass

    # Unresolvable forward references: keep whatever is a real type
    try:
        raw = inspect.get_annotations(model_type)
    except Exception:
        logger.debug("Unreadable annotations on %s", _qualname(model_type), exc_info=True)
        return {}
    return {k: v for k, v in raw.items() if not isinstance(v, str)}


def _qualname(tp: Any) -> str:
    return getattr(tp, "__qualname__", repr(tp))
