from __future__ import annotations

import logging

import pytest

from debug import Debug


def test_switches_are_shared_between_instances(debug_switches: Debug) -> None:
    other = Debug()
    debug_switches.enable("rotor")
    assert other.status()["rotor"]
    other.disable("rotor")
    assert not debug_switches.status()["rotor"]


def test_enable_all(debug_switches: Debug) -> None:
    debug_switches.enable_all()
    assert all(debug_switches.status().values())
    assert "machine" in repr(debug_switches)


def test_unknown_component(debug_switches: Debug) -> None:
    with pytest.raises(ValueError, match="No such component"):
        debug_switches.enable("keyboard")


def test_log_respects_switch(debug_switches: Debug, caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        debug_switches.disable("config")
        debug_switches.log("config", "hidden")
        debug_switches.enable("config")
        debug_switches.log("config", "shown")
    messages = [r.getMessage() for r in caplog.records]
    assert "[CONFIG] shown" in messages
    assert not any("hidden" in m for m in messages)
