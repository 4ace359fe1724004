"""Shared fixtures"""
import pytest

from httpbinding.binding.provider import HttpGenericBindingProvider
from httpbinding.dependencies.entity_types import create_item


@pytest.fixture
def provider():
    return HttpGenericBindingProvider()


@pytest.fixture
def switch_item():
    return create_item("Switch", "Light")


@pytest.fixture
def number_item():
    return create_item("Number", "Temperature")
