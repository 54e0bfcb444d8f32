"""Tests for VLAN resources."""
import pytest

from eos_converge.errors import ValidationError
from eos_converge.providers import VlanProvider
from eos_converge.resources.schema import VlanRecord
from eos_converge.resources.vlan import Vlan, parse_vlans, trunk_groups_commands, vlan_name_commands

SHOW_VLAN = {
    "vlans": {
        "1": {"name": "default", "status": "active"},
        "10": {"name": "servers", "status": "active"},
        "20": {"name": "storage", "status": "suspended"},
    }
}

SHOW_TRUNK_GROUP = {
    "trunkGroups": {
        "1": {"names": []},
        "10": {"names": ["mlagpeer", "spine"]},
        "20": {"names": []},
    }
}


@pytest.fixture
def node(make_node):
    return make_node(responses={"show vlan": SHOW_VLAN, "show vlan trunk group": SHOW_TRUNK_GROUP})


class TestParseVlans:
    """Tests for merging VLAN replies."""

    def test_merge(self):
        records = parse_vlans(SHOW_VLAN, SHOW_TRUNK_GROUP)
        assert set(records) == {"1", "10", "20"}
        assert records["10"].vlan_name == "servers"
        assert records["10"].trunk_groups == ["mlagpeer", "spine"]

    def test_suspended_maps_to_suspend(self):
        records = parse_vlans(SHOW_VLAN, SHOW_TRUNK_GROUP)
        assert records["20"].state == "suspend"
        assert records["1"].state == "active"

    def test_missing_trunk_groups(self):
        records = parse_vlans(SHOW_VLAN, {})
        assert records["10"].trunk_groups == []

    def test_get(self, node):
        assert Vlan(node).get("10").vlan_name == "servers"
        assert Vlan(node).get(30) is None


class TestVlanRecord:
    def test_spaces_become_underscores(self):
        assert VlanRecord(name="10", vlan_name="web servers").vlan_name == "web_servers"

    def test_numeric_name(self):
        assert VlanRecord.from_fields(name=10).name == "10"

    def test_out_of_range(self):
        with pytest.raises(ValidationError):
            VlanRecord.from_fields(name="4095")
        with pytest.raises(ValidationError):
            VlanRecord.from_fields(name="abc")


class TestVlanCommands:
    """Tests for VLAN command builders."""

    def test_name(self):
        assert vlan_name_commands("10", "web servers") == ["vlan 10", "name web_servers"]

    def test_name_default(self):
        assert vlan_name_commands("10", "x", default=True) == ["vlan 10", "default name"]

    def test_trunk_groups(self):
        assert trunk_groups_commands("10", ["a", "b"]) == [
            "vlan 10", "no trunk group", "trunk group a", "trunk group b",
        ]

    def test_create_delete(self, node):
        api = Vlan(node)
        api.create("30")
        api.delete("30")
        api.default("30")
        assert node.transport.sent == ["vlan 30", "no vlan 30", "default vlan 30"]


class TestVlanProvider:
    """Tests for the VLAN provider."""

    def test_instances(self, node):
        providers = VlanProvider.instances(node)
        assert sorted(p.name for p in providers) == ["1", "10", "20"]

    def test_create(self, node):
        provider = VlanProvider(node, name="30")
        provider.create(VlanRecord(name="30", vlan_name="backup", trunk_groups=["tg1"]))
        assert node.transport.configured == [
            ["vlan 30"],
            ["vlan 30", "name backup"],
            ["vlan 30", "no trunk group", "trunk group tg1"],
        ]
        assert provider.current.vlan_name == "backup"

    def test_destroy(self, node):
        provider = VlanProvider(node, current=Vlan(node).get("20"))
        provider.destroy()
        assert not provider.exists()
        assert node.transport.sent == ["no vlan 20"]
