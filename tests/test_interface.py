"""Tests for interface and IP interface resources."""
import pytest

from eos_converge.errors import ValidationError
from eos_converge.providers import InterfaceProvider, IpInterfaceProvider
from eos_converge.resources.interface import (
    Interface,
    description_commands,
    interface_names,
    parse_interface,
    speed_commands,
)
from eos_converge.resources.ipinterface import IpInterface, helper_addresses_commands
from eos_converge.resources.schema import InterfaceRecord, IpInterfaceRecord

RUNNING_CONFIG = """interface Ethernet1
   description uplink to spine
   speed forced 10gfull
   lacp port-priority 100
   no shutdown
!
interface Ethernet2
   shutdown
!
interface Loopback0
   description router id
   ip address 1.1.1.1/32
   no shutdown
!
interface Vlan100
   ip address 10.0.100.1/24
   mtu 9000
   ip helper-address 10.1.1.1
   ip helper-address 10.1.1.2
   no shutdown
!
"""

SHOW_INTERFACES = {
    "interfaces": {
        "Ethernet1": {"forwardingModel": "bridged"},
        "Ethernet2": {"forwardingModel": "bridged"},
        "Loopback0": {"forwardingModel": "routed"},
        "Vlan100": {"forwardingModel": "routed"},
    }
}


class TestParseInterface:
    """Tests for reading interface blocks."""

    def test_interface_names(self):
        assert interface_names(RUNNING_CONFIG) == ["Ethernet1", "Ethernet2", "Loopback0", "Vlan100"]

    def test_ethernet_fields(self, make_node):
        node = make_node(RUNNING_CONFIG)
        record = Interface(node).get("Ethernet1")
        assert record.description == "uplink to spine"
        assert record.shutdown is False
        assert record.speed == "forced 10gfull"
        assert record.lacp_priority == 100

    def test_ethernet_defaults(self, make_node):
        """Missing lines report empty description, shutdown and default speed."""
        record = Interface(make_node(RUNNING_CONFIG)).get("Ethernet2")
        assert record.description == ""
        assert record.shutdown is True
        assert record.speed == "default"
        assert record.lacp_priority is None

    def test_logical_skips_ethernet_fields(self):
        block = "interface Loopback0\n   description router id\n   no shutdown\n!"
        record = parse_interface("Loopback0", block)
        assert record.speed is None
        assert record.lacp_priority is None

    def test_shutdown_ignores_description_text(self):
        """Admin state comes from the child line, not words inside the description."""
        block = (
            "interface Ethernet3\n"
            "   description maintenance - no shutdown before friday\n"
            "   shutdown\n"
            "!"
        )
        record = parse_interface("Ethernet3", block)
        assert record.shutdown is True
        assert record.description == "maintenance - no shutdown before friday"

    def test_missing_interface(self, make_node):
        assert Interface(make_node(RUNNING_CONFIG)).get("Ethernet99") is None

    def test_getall(self, make_node):
        records = Interface(make_node(RUNNING_CONFIG)).getall()
        assert set(records) == {"Ethernet1", "Ethernet2", "Loopback0", "Vlan100"}

    def test_malformed_priority(self):
        block = "interface Ethernet1\n   lacp port-priority high\n!"
        with pytest.raises(ValidationError):
            parse_interface("Ethernet1", block)

    def test_snapshot_fetched_once(self, make_node):
        """Every parser reuses the same running-config snapshot."""
        node = make_node(RUNNING_CONFIG)
        Interface(node).getall()
        assert len(node.transport.enabled) == 1


class TestInterfaceCommands:
    """Tests for interface command builders and setters."""

    def test_set_description(self, make_node):
        node = make_node(RUNNING_CONFIG)
        assert Interface(node).set_description("Ethernet1", "uplink") is True
        assert node.transport.configured == [["interface Ethernet1", "description uplink"]]

    def test_description_default_ignores_value(self):
        assert description_commands("Ethernet1", "uplink", default=True) == [
            "interface Ethernet1",
            "default description",
        ]

    def test_clear_description(self):
        assert description_commands("Ethernet1")[-1] == "no description"

    def test_speed_default_value_clears(self):
        assert speed_commands("Ethernet1", "default")[-1] == "no speed"
        assert speed_commands("Ethernet1", "forced 1000full")[-1] == "speed forced 1000full"

    def test_set_shutdown(self, make_node):
        node = make_node(RUNNING_CONFIG)
        Interface(node).set_shutdown("Ethernet2", False)
        assert node.transport.sent == ["interface Ethernet2", "no shutdown"]

    def test_physical_create_refused(self, make_node):
        node = make_node(RUNNING_CONFIG)
        assert Interface(node).create("Ethernet5") is False
        assert Interface(node).delete("Management1") is False
        assert node.transport.configured == []

    def test_logical_create_and_delete(self, make_node):
        node = make_node(RUNNING_CONFIG)
        api = Interface(node)
        assert api.create("Loopback1") is True
        assert api.delete("Loopback1") is True
        assert node.transport.sent == ["interface Loopback1", "no interface Loopback1"]

    def test_rejected_config_reports_failure(self, make_node):
        node = make_node(RUNNING_CONFIG, reject_config=True)
        assert Interface(node).set_description("Ethernet1", "x") is False

    def test_round_trip(self, make_simulated_node):
        """A value written through the setter is read back by the parser."""
        node = make_simulated_node(RUNNING_CONFIG)
        api = Interface(node)
        api.set_description("Ethernet2", "server port")
        api.set_lacp_priority("Ethernet2", 200)
        record = api.get("Ethernet2")
        assert record.description == "server port"
        assert record.lacp_priority == 200
        api.set_description("Ethernet2")
        assert api.get("Ethernet2").description == ""


class TestIpInterface:
    """Tests for routed interfaces."""

    @pytest.fixture
    def node(self, make_node):
        return make_node(RUNNING_CONFIG, {"show interfaces": SHOW_INTERFACES})

    def test_getall_only_routed(self, node):
        records = IpInterface(node).getall()
        assert set(records) == {"Loopback0", "Vlan100"}

    def test_parse_fields(self, node):
        record = IpInterface(node).get("Vlan100")
        assert record.address == "10.0.100.1/24"
        assert record.mtu == 9000
        assert record.helper_addresses == ["10.1.1.1", "10.1.1.2"]

    def test_parse_bare(self, node):
        record = IpInterface(node).get("Loopback0")
        assert record.mtu is None
        assert record.helper_addresses == []

    def test_create_ethernet_disables_switchport(self, node):
        IpInterface(node).create("Ethernet2")
        assert node.transport.sent == ["interface Ethernet2", "no switchport"]

    def test_create_svi(self, node):
        IpInterface(node).create("Vlan200")
        assert node.transport.sent == ["interface Vlan200"]

    def test_delete_port_channel_restores_switchport(self, node):
        IpInterface(node).delete("Port-Channel10")
        assert node.transport.sent == ["interface Port-Channel10", "no ip address", "switchport"]

    def test_helper_addresses_replaced(self):
        assert helper_addresses_commands("Vlan100", ["10.2.2.2"]) == [
            "interface Vlan100",
            "no ip helper-address",
            "ip helper-address 10.2.2.2",
        ]


class TestInterfaceProvider:
    """Tests for the interface providers."""

    def test_instances(self, make_node):
        providers = InterfaceProvider.instances(make_node(RUNNING_CONFIG))
        assert {p.name for p in providers} == {"Ethernet1", "Ethernet2", "Loopback0", "Vlan100"}
        assert all(p.exists() for p in providers)

    def test_update_sets_cache(self, make_node):
        node = make_node(RUNNING_CONFIG)
        provider = InterfaceProvider(node, current=Interface(node).get("Ethernet1"))
        provider.update("description", "uplink")
        assert provider.current.description == "uplink"
        assert node.transport.sent == ["interface Ethernet1", "description uplink"]

    def test_create_physical_raises(self, make_node):
        provider = InterfaceProvider(make_node(RUNNING_CONFIG), name="Ethernet9")
        with pytest.raises(ValidationError):
            provider.create(InterfaceRecord(name="Ethernet9", description="x"))

    def test_destroy_physical_raises(self, make_node):
        node = make_node(RUNNING_CONFIG)
        provider = InterfaceProvider(node, current=Interface(node).get("Ethernet1"))
        with pytest.raises(ValidationError):
            provider.destroy()
        assert provider.exists()

    def test_create_logical_applies_properties(self, make_node):
        node = make_node(RUNNING_CONFIG)
        provider = InterfaceProvider(node, name="Loopback1")
        provider.create(InterfaceRecord(name="Loopback1", description="mgmt", shutdown=False))
        assert node.transport.configured == [
            ["interface Loopback1"],
            ["interface Loopback1", "description mgmt"],
            ["interface Loopback1", "no shutdown"],
        ]
        assert provider.exists()
        assert provider.current.description == "mgmt"

    def test_unsupported_property(self, make_node):
        node = make_node(RUNNING_CONFIG)
        provider = InterfaceProvider(node, current=Interface(node).get("Ethernet1"))
        with pytest.raises(ValidationError):
            provider.update("mtu", 9000)

    def test_helper_addresses_reordered(self, make_simulated_node):
        """Reordering the list clears every helper before adding any back."""
        node = make_simulated_node("interface Vlan100\n   ip address 10.0.100.1/24\n!\n")
        provider = IpInterfaceProvider(node, current=IpInterface(node).get("Vlan100"))

        provider.update("helper_addresses", ["10.1.1.1", "10.1.1.2", "10.1.1.3"])
        first = IpInterface(node).get("Vlan100").helper_addresses
        provider.update("helper_addresses", ["10.1.1.3", "10.1.1.2", "10.1.1.1"])
        second = IpInterface(node).get("Vlan100").helper_addresses

        assert sorted(first) == sorted(second) == ["10.1.1.1", "10.1.1.2", "10.1.1.3"]
        batch = node.transport.configured[-1]
        assert batch[:2] == ["interface Vlan100", "no ip helper-address"]
        assert all(command.startswith("ip helper-address ") for command in batch[2:])
        assert len(batch) == 5

    def test_ipinterface_create(self, make_node):
        node = make_node(RUNNING_CONFIG, {"show interfaces": SHOW_INTERFACES})
        provider = IpInterfaceProvider(node, name="Vlan200")
        provider.create(IpInterfaceRecord(name="Vlan200", address="10.0.200.1/24"))
        assert node.transport.configured == [
            ["interface Vlan200"],
            ["interface Vlan200", "ip address 10.0.200.1/24"],
        ]
