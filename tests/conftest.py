"""Shared fixtures: a registry with the sample validators and an engine over it."""

import pytest
from sample_models import (
    AddressValidator,
    LeafValidator,
    NodeValidator,
    OrderValidator,
    ProductValidator,
    UserRegistrationValidator,
)

from fluentform.engine import FluentEngine
from fluentform.registry import ValidatorRegistry


@pytest.fixture
def registry() -> ValidatorRegistry:
    reg = ValidatorRegistry()
    for validator in (
        AddressValidator(),
        OrderValidator(),
        UserRegistrationValidator(),
        ProductValidator(),
        NodeValidator(),
        LeafValidator(),
    ):
        reg.add(validator)
    return reg


@pytest.fixture
def engine(registry: ValidatorRegistry) -> FluentEngine:
    return FluentEngine(registry)
