"""Tests for the capability catalog (guest-info)."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from guestagent import __version__
from guestagent.catalog import CapabilityCatalog
from guestagent.models import AgentInfo
from guestagent.registry import CommandRegistry


def _registry(*names: str) -> CommandRegistry:
    reg = CommandRegistry()
    for name in names:
        reg.register(name, lambda: None)
    return reg


class TestGetInfo:
    """Tests for capability reports."""

    def test_reverse_registration_order(self) -> None:
        """Registry a, b, c reports as c, b, a."""
        info = CapabilityCatalog(_registry("a", "b", "c")).get_info()
        assert info.command_names() == ["c", "b", "a"]

    def test_single_command(self) -> None:
        info = CapabilityCatalog(_registry("only")).get_info()
        assert info.command_names() == ["only"]

    def test_empty_registry(self) -> None:
        """No commands still yields a version."""
        info = CapabilityCatalog(CommandRegistry()).get_info()
        assert info.supported_commands == []
        assert info.version
        assert info.version == __version__

    def test_custom_version(self) -> None:
        info = CapabilityCatalog(CommandRegistry(), version="9.9.9-test").get_info()
        assert info.version == "9.9.9-test"

    def test_enabled_matches_predicate(self) -> None:
        """Each descriptor's enabled flag is the registry's answer."""
        reg = _registry("a", "b", "c")
        reg.disable("b")
        info = CapabilityCatalog(reg).get_info()
        assert {c.name: c.enabled for c in info.supported_commands} == {
            "a": True, "b": False, "c": True,
        }

    def test_enabled_evaluated_at_call_time(self) -> None:
        """A later policy change shows up in the next report only."""
        reg = _registry("a")
        catalog = CapabilityCatalog(reg)
        before = catalog.get_info()
        reg.disable("a")
        after = catalog.get_info()
        assert before.supported_commands[0].enabled is True
        assert after.supported_commands[0].enabled is False

    def test_fresh_report_each_call(self) -> None:
        catalog = CapabilityCatalog(_registry("a"))
        assert catalog.get_info() is not catalog.get_info()

    def test_queries_registry_per_name(self) -> None:
        """The predicate is asked once per enumerated name."""
        reg = MagicMock()
        reg.list_command_names.return_value = ["x", "y"]
        reg.is_enabled.side_effect = lambda name: name == "y"

        info = CapabilityCatalog(reg, version="1").get_info()

        assert [c.args[0] for c in reg.is_enabled.call_args_list] == ["x", "y"]
        assert [(c.name, c.enabled) for c in info.supported_commands] == [
            ("y", True), ("x", False),
        ]

    def test_registry_failure_propagates(self) -> None:
        """Registry errors are not swallowed."""
        reg = MagicMock()
        reg.list_command_names.side_effect = MemoryError
        with pytest.raises(MemoryError):
            CapabilityCatalog(reg).get_info()

    def test_returns_model(self) -> None:
        assert isinstance(CapabilityCatalog(CommandRegistry()).get_info(), AgentInfo)
