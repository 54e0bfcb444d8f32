"""Tests for static route resources."""
import pytest

from eos_converge.errors import ValidationError
from eos_converge.providers import ChangeSet, StaticRouteProvider
from eos_converge.resources.schema import StaticRouteRecord
from eos_converge.resources.staticroute import Staticroute, parse_routes, route_line

RUNNING_CONFIG = """ip route 0.0.0.0/0 10.0.0.1
ip route 10.10.0.0/16 10.0.0.2 200 tag 5 name backup-path
ip route 192.168.0.0/24 Null0 tag 10
!
"""


@pytest.fixture
def node(make_node):
    return make_node(RUNNING_CONFIG)


class TestParseRoutes:
    """Tests for reading static routes."""

    def test_keys(self):
        assert set(parse_routes(RUNNING_CONFIG)) == {
            "0.0.0.0/0/10.0.0.1",
            "10.10.0.0/16/10.0.0.2",
            "192.168.0.0/24/Null0",
        }

    def test_default_route(self):
        route = parse_routes(RUNNING_CONFIG)["0.0.0.0/0/10.0.0.1"]
        assert route.masklen == 0
        assert route.distance is None
        assert route.tag is None
        assert route.route_name is None

    def test_all_options(self, node):
        route = Staticroute(node).get("10.10.0.0/16/10.0.0.2")
        assert (route.distance, route.tag, route.route_name) == (200, 5, "backup-path")

    def test_tag_without_distance(self):
        route = parse_routes(RUNNING_CONFIG)["192.168.0.0/24/Null0"]
        assert route.distance is None
        assert route.tag == 10

    def test_interface_with_gateway(self):
        routes = parse_routes("ip route 10.0.0.0/8 Ethernet1 10.1.1.1 1 tag 7\n")
        route = routes["10.0.0.0/8/Ethernet1 10.1.1.1"]
        assert route.nexthop == "Ethernet1 10.1.1.1"
        assert (route.distance, route.tag) == (1, 7)
        assert route_line(route) == "ip route 10.0.0.0/8 Ethernet1 10.1.1.1 1 tag 7"

    def test_interface_with_distance_only(self):
        route = parse_routes("ip route 10.0.0.0/8 Null0 250\n")["10.0.0.0/8/Null0"]
        assert route.distance == 250


class TestStaticRouteRecord:
    def test_identity_from_name(self):
        record = StaticRouteRecord(name="10.0.0.0/8/192.0.2.1")
        assert (record.prefix, record.masklen, record.nexthop) == ("10.0.0.0", 8, "192.0.2.1")

    def test_distance_range(self):
        with pytest.raises(ValidationError):
            StaticRouteRecord.from_fields(name="10.0.0.0/8/192.0.2.1", distance=0)


class TestStaticRouteProvider:
    """Tests for the batched static route provider."""

    def test_add(self, node):
        provider = StaticRouteProvider(node, name="172.16.0.0/12/10.0.0.9")
        desired = StaticRouteRecord(name="172.16.0.0/12/10.0.0.9", distance=250)
        changes = provider.create(ChangeSet(), desired)
        assert provider.flush(changes) == ["ip route 172.16.0.0/12 10.0.0.9 250"]

    def test_remove_restates_line(self, node):
        current = Staticroute(node).get("10.10.0.0/16/10.0.0.2")
        provider = StaticRouteProvider(node, current=current)
        commands = provider.apply(provider.destroy(ChangeSet()))
        assert commands == ["no ip route 10.10.0.0/16 10.0.0.2 200 tag 5 name backup-path"]
        assert node.transport.sent == commands

    def test_change_replaces(self, node):
        current = Staticroute(node).get("0.0.0.0/0/10.0.0.1")
        provider = StaticRouteProvider(node, current=current)
        changes = provider.update(ChangeSet(), "tag", 7)
        assert provider.flush(changes) == [
            "no ip route 0.0.0.0/0 10.0.0.1",
            "ip route 0.0.0.0/0 10.0.0.1 tag 7",
        ]

    def test_unchanged(self, node):
        current = Staticroute(node).get("192.168.0.0/24/Null0")
        provider = StaticRouteProvider(node, current=current)
        assert provider.flush(provider.update(ChangeSet(), "tag", 10)) == []

    def test_bad_name(self, node):
        provider = StaticRouteProvider(node, name="not-a-route")
        changes = provider.create(ChangeSet(), StaticRouteRecord(name="not-a-route"))
        with pytest.raises(ValidationError):
            provider.flush(changes)

    def test_route_line(self):
        record = StaticRouteRecord(name="10.0.0.0/8/Null0", route_name="blackhole")
        assert route_line(record) == "ip route 10.0.0.0/8 Null0 name blackhole"
