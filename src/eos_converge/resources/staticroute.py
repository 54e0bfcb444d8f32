"""IPv4 static routes, identified by prefix, mask length and next hop.

A next hop is a gateway address, an interface, or an interface followed by a
gateway (``Ethernet1 10.1.1.1``); the last form is kept as one string.
"""
import re

from .commands import parse_int
from .schema import StaticRouteRecord

ROUTE_RE = re.compile(
    r"^ip route ([^/\s]+)/(\S+) (\S+(?: \d{1,3}(?:\.\d{1,3}){3})?)"
    r"(?: (\d+))?(?: tag (\S+))?(?: name (.+))?$",
    re.M,
)


def route_key(prefix: str, masklen: int, nexthop: str) -> str:
    return f"{prefix}/{masklen}/{nexthop}"


def parse_routes(config: str) -> dict[str, StaticRouteRecord]:
    result = {}
    for prefix, masklen, nexthop, distance, tag, route_name in ROUTE_RE.findall(config):
        length = parse_int(masklen, "static route masklen")
        name = route_key(prefix, length, nexthop)
        result[name] = StaticRouteRecord.from_fields(
            name=name,
            prefix=prefix,
            masklen=length,
            nexthop=nexthop,
            distance=parse_int(distance or None, "static route distance"),
            tag=parse_int(tag or None, "static route tag"),
            route_name=route_name or None,
        )
    return result


def route_line(route: StaticRouteRecord) -> str:
    line = f"ip route {route.prefix}/{route.masklen} {route.nexthop}"
    if route.distance is not None:
        line += f" {route.distance}"
    if route.tag is not None:
        line += f" tag {route.tag}"
    if route.route_name:
        line += f" name {route.route_name}"
    return line


def add_commands(route: StaticRouteRecord) -> list[str]:
    return [route_line(route)]


def remove_commands(route: StaticRouteRecord) -> list[str]:
    return [f"no {route_line(route)}"]


class Staticroute:
    """Static routes configured on a node."""

    def __init__(self, node):
        self.node = node

    def getall(self) -> dict[str, StaticRouteRecord]:
        return parse_routes(self.node.running_config())

    def get(self, name: str):
        return self.getall().get(name)

    def add(self, route: StaticRouteRecord) -> bool:
        return self.node.configure(add_commands(route))

    def remove(self, route: StaticRouteRecord) -> bool:
        return self.node.configure(remove_commands(route))
