"""Tests for HttpGenericBindingProvider"""
import logging
import threading
from decimal import Decimal

import pytest

from httpbinding.binding.commands import BindingKey
from httpbinding.dependencies.entity_types import create_item
from httpbinding.dependencies.item_types import (
    DecimalType, OnOffType, UnDefType)
from httpbinding.exceptions import (
    BindingConfigParseException, CommandParseError, GrammarError)

LIGHTS_AND_WEATHER = (
    ">[ON:POST:http://x.org/l?s=on] >[OFF:POST:http://x.org/l?s=off] "
    "<[http://x.org/w:60000:REGEX(.*)]")


def test_binding_type(provider):
    assert provider.binding_type == "http"


def test_outbound_and_inbound(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item, LIGHTS_AND_WEATHER)

    assert provider.get_http_method("Light", OnOffType.ON) == "POST"
    assert provider.get_url("Light", OnOffType.ON) == "http://x.org/l?s=on"
    assert provider.get_body("Light", OnOffType.ON) is None
    assert provider.get_http_method("Light", OnOffType.OFF) == "POST"
    assert provider.get_url("Light", OnOffType.OFF) == (
        "http://x.org/l?s=off")
    assert provider.get_body("Light", OnOffType.OFF) is None

    assert provider.get_url("Light") == "http://x.org/w"
    assert provider.get_refresh_interval("Light") == 60000
    assert provider.get_transformation("Light") == "REGEX=.*"
    assert provider.get_http_headers("Light") == []
    assert provider.get_in_binding_item_names() == ["Light"]


def test_wildcard(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item, ">[*:POST:http://x.org/l?s=%2$s{AuthKey=key}]")

    for command in (OnOffType.ON, OnOffType.OFF):
        assert provider.get_url("Light", command) == "http://x.org/l?s=%2$s"
        assert provider.get_http_headers("Light", command) == [
            ("AuthKey", "key")]
    assert provider.get_url("Light", BindingKey.CHANGED) is None
    assert provider.get_http_method("Light", BindingKey.CHANGED) is None


def test_changed(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item,
        ">[CHANGED:POST:http://x.org/l?status=%2$s&date=%1$tY-%1$tm-%1$td"
        "{AuthKey=somekey&timerange=day}]")

    assert provider.get_url("Light", BindingKey.CHANGED) == (
        "http://x.org/l?status=%2$s&date=%1$tY-%1$tm-%1$td")
    assert provider.get_http_headers("Light", BindingKey.CHANGED) == [
        ("AuthKey", "somekey"), ("timerange", "day")]
    assert provider.get_url("Light", OnOffType.ON) is None


def test_post_body_and_transformation(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item,
        ">[ON:POST:http://x.org/l:on please] "
        ">[OFF:POST:http://x.org/l:REGEX(.*)]")

    assert provider.get_body("Light", OnOffType.ON) == "on please"
    assert provider.get_transformation("Light", OnOffType.ON) is None
    assert provider.get_body("Light", OnOffType.OFF) is None
    assert provider.get_transformation("Light", OnOffType.OFF) == "REGEX=.*"


def test_last_segment_wins(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item,
        ">[ON:POST:http://a.org/] >[ON:GET:http://b.org/]")

    assert provider.get_http_method("Light", OnOffType.ON) == "GET"
    assert provider.get_url("Light", OnOffType.ON) == "http://b.org/"
    assert len(provider.get_descriptor("Light")) == 1


def test_last_inbound_segment_wins(provider, number_item):
    provider.process_binding_configuration(
        "test", number_item,
        "<[http://a.org/:1000:default] <[http://b.org/:2000:default]")

    assert provider.get_url("Temperature") == "http://b.org/"
    assert provider.get_refresh_interval("Temperature") == 2000


def test_invalid_configuration(provider, switch_item):
    with pytest.raises(GrammarError):
        provider.process_binding_configuration(
            "test", switch_item, "garbage-no-brackets")
    assert not provider.provides_binding_for("Light")
    assert not provider.provides_binding()


def test_invalid_command(provider, number_item):
    with pytest.raises(CommandParseError):
        provider.process_binding_configuration(
            "test", number_item, ">[ON:POST:http://x.org/]")
    assert provider.get_descriptor("Temperature") is None


def test_failing_segment_aborts_whole_configuration(provider, switch_item):
    with pytest.raises(BindingConfigParseException):
        provider.process_binding_configuration(
            "test", switch_item,
            ">[ON:POST:http://x.org/] <[http://x.org/w:soon:REGEX(.*)]")
    assert not provider.provides_binding_for("Light")


def test_invalid_reconfiguration_drops_binding(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item, ">[ON:POST:http://x.org/]")
    with pytest.raises(GrammarError):
        provider.process_binding_configuration(
            "test", switch_item, ">[ON:POST:]")
    assert not provider.provides_binding_for("Light")


def test_reconfiguration_replaces_descriptor(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item, LIGHTS_AND_WEATHER)
    provider.process_binding_configuration(
        "test", switch_item, ">[ON:GET:http://y.org/]")

    assert provider.get_url("Light", OnOffType.ON) == "http://y.org/"
    assert provider.get_url("Light", OnOffType.OFF) is None
    assert provider.get_in_binding_item_names() == []


def test_none_configuration(provider, switch_item, caplog):
    with caplog.at_level(logging.WARNING):
        assert provider.process_binding_configuration(
            "test", switch_item, None) is None
    assert "process bindingConfig aborted" in caplog.text
    assert not provider.provides_binding_for("Light")


def test_unknown_item(provider):
    assert provider.get_url("Nothing") is None
    assert provider.get_url("Nothing", OnOffType.ON) is None
    assert provider.get_http_method("Nothing", OnOffType.ON) is None
    assert provider.get_http_headers("Nothing") is None
    assert provider.get_body("Nothing", OnOffType.ON) is None
    assert provider.get_transformation("Nothing") is None
    assert provider.get_refresh_interval("Nothing") == 0
    assert provider.get_state("Nothing", "ON") is None


def test_outbound_only_item_has_no_polling(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item, ">[ON:POST:http://x.org/]")
    assert provider.get_url("Light") is None
    assert provider.get_refresh_interval("Light") == 0
    assert provider.get_in_binding_item_names() == []


def test_get_state(provider, number_item):
    provider.process_binding_configuration(
        "test", number_item, "<[http://x.org/t:1000:JSONPATH($.t)]")
    assert provider.get_state("Temperature", "21.5") == DecimalType(
        Decimal("21.5"))
    assert provider.get_state("Temperature", "NULL") is UnDefType.NULL
    assert provider.get_state("Temperature", "warm") is None


def test_headers_are_copied(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item, "<[http://x.org/{a=1}:1000:default]")
    provider.get_http_headers("Light").append(("b", "2"))
    assert provider.get_http_headers("Light") == [("a", "1")]


def test_remove_configurations(provider, switch_item, number_item):
    provider.process_binding_configuration(
        "lights", switch_item, ">[ON:POST:http://x.org/]")
    provider.process_binding_configuration(
        "sensors", number_item, "<[http://x.org/t:1000:default]")

    provider.remove_configurations("lights")

    assert provider.item_names == ["Temperature"]
    assert provider.get_in_binding_item_names() == ["Temperature"]


def test_remove_binding(provider, switch_item):
    provider.process_binding_configuration(
        "test", switch_item, ">[ON:POST:http://x.org/]")
    provider.remove_binding("Light")
    assert not provider.provides_binding_for("Light")
    assert provider.context_map["test"] == set()


def test_readers_see_complete_descriptors(provider, switch_item):
    small = ">[ON:POST:http://x.org/]"
    large = ">[ON:POST:http://x.org/] >[OFF:POST:http://x.org/] " \
        "<[http://x.org/w:1000:default]"
    provider.process_binding_configuration("test", switch_item, small)
    seen = set()
    stop = threading.Event()

    def read():
        while not stop.is_set():
            seen.add(len(provider.get_descriptor("Light")))

    reader = threading.Thread(target=read)
    reader.start()
    try:
        for index in range(200):
            provider.process_binding_configuration(
                "test", switch_item, large if index % 2 else small)
    finally:
        stop.set()
        reader.join()

    assert seen <= {1, 3}


def test_items_are_independent(provider, switch_item):
    other = create_item("Switch", "Other")
    provider.process_binding_configuration(
        "test", switch_item, ">[ON:POST:http://x.org/light]")
    provider.process_binding_configuration(
        "test", other, ">[ON:POST:http://x.org/other]")
    assert provider.get_url("Light", OnOffType.ON) == "http://x.org/light"
    assert provider.get_url("Other", OnOffType.ON) == "http://x.org/other"
