"""Tests for BindingManager and Core"""
import asyncio

import pytest
import voluptuous as vol
import yaml

from httpbinding.core import Core
from httpbinding.dependencies.item_types import OnOffType
from httpbinding.exceptions import GrammarError

ITEMS = [
    {
        "name": "Light",
        "type": "Switch",
        "http": ">[ON:POST:http://x.org/l?s=on] "
                ">[OFF:POST:http://x.org/l?s=off]"
    },
    {
        "name": "Weather",
        "type": "String",
        "label": "Weather today",
        "http": "<[http://x.org/w:60000:REGEX(.*)]"
    },
    {
        "name": "Broken",
        "type": "Switch",
        "http": "garbage-no-brackets"
    },
    {
        "name": "Disabled",
        "type": "Switch",
        "enabled": False,
        "http": ">[ON:POST:http://x.org/d]"
    },
]


@pytest.fixture
def core(tmp_path):
    return Core(cfg={"items": ITEMS},
                cfg_path=str(tmp_path / "configuration.yaml"))


def test_bootstrap_registers_items(core):
    asyncio.run(core.bootstrap())
    manager = core.binding_manager

    assert sorted(manager.items) == ["Broken", "Light", "Weather"]
    assert manager.get_item("Weather").label == "Weather today"
    assert manager.get_item("Light").label == "Light"
    assert core.provider.get_url("Light", OnOffType.ON) == (
        "http://x.org/l?s=on")
    assert core.provider.get_in_binding_item_names() == ["Weather"]


def test_invalid_items_are_reported(core):
    asyncio.run(core.bootstrap())
    manager = core.binding_manager

    assert list(manager.errors) == ["Broken"]
    assert isinstance(manager.errors["Broken"], GrammarError)
    assert not core.provider.provides_binding_for("Broken")


def test_disabled_items_are_skipped(core):
    asyncio.run(core.bootstrap())
    assert core.binding_manager.get_item("Disabled") is None
    assert not core.provider.provides_binding_for("Disabled")


def test_unknown_item_type(tmp_path):
    core = Core(cfg={"items": [
        {"name": "X", "type": "Toaster", "http": ">[ON:POST:http://x]"}]},
        cfg_path=str(tmp_path / "configuration.yaml"))
    with pytest.raises(vol.Invalid):
        asyncio.run(core.bootstrap())


def test_register_item_clears_previous_error(core):
    asyncio.run(core.bootstrap())
    manager = core.binding_manager

    assert manager.register_item(
        manager.get_item("Broken"), ">[ON:GET:http://x.org/fixed]")
    assert "Broken" not in manager.errors
    assert core.provider.get_http_method("Broken", OnOffType.ON) == "GET"


def test_reload_replaces_items(core, tmp_path):
    asyncio.run(core.bootstrap())
    (tmp_path / "configuration.yaml").write_text(yaml.safe_dump({
        "items": [{
            "name": "Fan",
            "type": "Switch",
            "http": ">[*:PUT:http://x.org/fan]"
        }]
    }))

    asyncio.run(core.reload())

    assert core.provider.item_names == ["Fan"]
    assert core.provider.get_http_method("Fan", OnOffType.OFF) == "PUT"
    assert core.binding_manager.errors == {}
