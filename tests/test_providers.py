"""Tests for the provider base classes and registry."""
import dataclasses

import pytest

from eos_converge.errors import CommandError, ValidationError
from eos_converge.providers import PROVIDERS, ChangeSet, PrefixListProvider, VlanProvider, get_provider
from eos_converge.resources.schema import PrefixListRecord, VlanRecord


class TestChangeSet:
    """Tests for ChangeSet."""

    def test_empty_is_falsy(self):
        assert not ChangeSet()
        assert ChangeSet(ensure="absent")
        assert ChangeSet().stage("tag", 1)

    def test_stage_returns_new_set(self):
        original = ChangeSet()
        staged = original.stage("action", "permit")
        assert original.values == {}
        assert staged.values == {"action": "permit"}

    def test_stage_all_merges(self):
        changes = ChangeSet().stage("a", 1).stage_all({"b": 2, "a": 3})
        assert changes.values == {"a": 3, "b": 2}

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ChangeSet().ensure = "present"


class TestRegistry:
    def test_order(self):
        names = list(PROVIDERS)
        assert names[0] == "eos_vlan"
        assert names.index("eos_prefix_list") < names.index("eos_route_map")
        assert names.index("eos_ospf_instance") < names.index("eos_ospf_network")

    def test_get_provider(self):
        assert get_provider("eos_vlan") is VlanProvider

    def test_unknown(self):
        with pytest.raises(KeyError):
            get_provider("eos_bgp")


class TestProviderBase:
    """Tests for shared provider behaviour."""

    def test_needs_name_or_record(self, make_node):
        with pytest.raises(ValidationError):
            VlanProvider(make_node())

    def test_exists_reads_cache_only(self, make_node):
        node = make_node()
        assert VlanProvider(node, current=VlanRecord(name="10")).exists()
        assert not VlanProvider(node, name="10").exists()
        assert node.transport.enabled == []

    def test_failed_command_raises(self, make_node):
        node = make_node(reject_config=True)
        provider = VlanProvider(node, current=VlanRecord(name="10", vlan_name="a"))
        with pytest.raises(CommandError):
            provider.update("vlan_name", "b")
        assert provider.current.vlan_name == "a"

    def test_desired_state_overlays_changes(self, make_node):
        current = PrefixListRecord(name="PL:10", action="deny", prefix="10.0.0.0", masklen=8)
        provider = PrefixListProvider(make_node(), current=current)
        state = provider.desired_state(ChangeSet().stage("action", "permit"))
        assert state.action == "permit"
        assert state.prefix == "10.0.0.0"
        assert state.ensure == "present"

    def test_desired_state_without_current(self, make_node):
        provider = PrefixListProvider(make_node(), name="PL:10")
        assert provider.desired_state(ChangeSet()).ensure == "absent"

    def test_apply_rejected_keeps_cache(self, make_node):
        current = PrefixListRecord(name="PL:10", action="deny", prefix="10.0.0.0", masklen=8)
        provider = PrefixListProvider(make_node(reject_config=True), current=current)
        with pytest.raises(CommandError):
            provider.apply(provider.update(ChangeSet(), "action", "permit"))
        assert provider.current.action == "deny"

    def test_unsupported_batched_property(self, make_node):
        provider = PrefixListProvider(make_node(), name="PL:10")
        with pytest.raises(ValidationError):
            provider.update(ChangeSet(), "description", "x")
