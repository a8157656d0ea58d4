"""Shared type aliases used across fluentform modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# A data-model class, the cache key for validator resolution
ModelType: TypeAlias = type

# Dotted property path, e.g. "shipping_address.street"
FieldPath: TypeAlias = str

# Zero-argument callable producing a validator instance
ValidatorFactory: TypeAlias = Callable[[], Any]
