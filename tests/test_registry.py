"""Tests for ValidatorRegistry."""

import pytest
from sample_models import Address, AddressValidator, Order, OrderValidator

from fluentform.errors import ConfigurationError
from fluentform.registry import Registry, ValidatorRegistry


class TestRegistration:
    def test_add_uses_bound_model_type(self) -> None:
        registry = ValidatorRegistry()
        validator = AddressValidator()
        registry.add(validator)
        assert Address in registry
        assert registry.lookup_validator(Address) is validator

    def test_add_with_explicit_model_type(self) -> None:
        registry = ValidatorRegistry()
        validator = object()
        registry.add(validator, model_type=Order)
        assert registry.lookup_validator(Order) is validator

    def test_add_without_model_type_fails(self) -> None:
        registry = ValidatorRegistry()
        with pytest.raises(ConfigurationError, match="Cannot determine the model type"):
            registry.add(object())

    def test_duplicate_registration_fails(self) -> None:
        registry = ValidatorRegistry()
        registry.add(AddressValidator())
        with pytest.raises(ConfigurationError, match="Duplicate"):
            registry.add_factory(Address, AddressValidator)

    def test_frozen_registry_rejects_registration(self) -> None:
        registry = ValidatorRegistry()
        registry.freeze()
        assert registry.frozen
        with pytest.raises(ConfigurationError, match="frozen"):
            registry.add(OrderValidator())
        assert len(registry) == 0


class TestLookup:
    def test_miss_returns_none(self) -> None:
        assert ValidatorRegistry().lookup_validator(Address) is None

    def test_exact_type_only(self) -> None:
        class SpecialAddress(Address):
            pass

        registry = ValidatorRegistry()
        registry.add(AddressValidator())
        assert registry.lookup_validator(SpecialAddress) is None

    def test_factory_called_per_lookup(self) -> None:
        registry = ValidatorRegistry()
        registry.add_factory(Address, AddressValidator)
        first = registry.lookup_validator(Address)
        second = registry.lookup_validator(Address)
        assert isinstance(first, AddressValidator)
        assert first is not second

    def test_satisfies_protocol(self) -> None:
        assert isinstance(ValidatorRegistry(), Registry)
