"""OSPF instances, networks and per-interface network type.

Instance settings come from the ``router ospf N`` block. Which interfaces
are active or passive depends on ``passive-interface default``:

* with it, interfaces are passive unless named by ``no passive-interface``;
* without it, interfaces are active unless named by ``passive-interface``.

The set of OSPF-enabled interfaces comes from ``show ip ospf interface``.
"""
import logging
import re
from typing import Optional

from .block import child_lines
from .commands import attribute_commands, flag_commands, parse_int
from .interface import interface_names
from .schema import OspfInstanceRecord, OspfInterfaceRecord, OspfNetworkRecord

logger = logging.getLogger(__name__)

INSTANCE_RE = re.compile(r"^router ospf (\d+)$", re.M)
ROUTER_ID_RE = re.compile(r"^\s+router-id (\S+)$", re.M)
MAX_LSA_RE = re.compile(r"^\s+max-lsa (\S+)", re.M)
MAXIMUM_PATHS_RE = re.compile(r"^\s+maximum-paths (\S+)$", re.M)
NETWORK_RE = re.compile(r"^\s+network (\S+) area (\S+)$", re.M)
REDISTRIBUTE_RE = re.compile(r"^\s+redistribute (bgp|connected|rip|static)(?: route-map (\S+))?$", re.M)
PASSIVE_DEFAULT_RE = re.compile(r"^\s+passive-interface default$", re.M)
PASSIVE_RE = re.compile(r"^\s+passive-interface (?!default$)(\S+)$", re.M)
ACTIVE_RE = re.compile(r"^\s+no passive-interface (?!default$)(\S+)$", re.M)
POINT_TO_POINT = "ip ospf network point-to-point"


def enabled_interfaces(reply: dict, instance: str) -> list[str]:
    """Interfaces running OSPF for ``instance`` per ``show ip ospf interface``."""
    vrf = reply.get("vrfs", {}).get("default", {})
    inst = vrf.get("instList", {}).get(str(instance), {})
    return list(inst.get("interfaces", {}))


def parse_areas(block: str) -> dict[str, list[str]]:
    areas: dict[str, list[str]] = {}
    for network, area in NETWORK_RE.findall(block):
        areas.setdefault(area, []).append(network)
    return areas


def parse_instance(instance: str, block: str, enabled: list[str]) -> OspfInstanceRecord:
    match = ROUTER_ID_RE.search(block)
    router_id = match.group(1) if match else ""
    match = MAX_LSA_RE.search(block)
    max_lsa = parse_int(match.group(1), "max-lsa") if match else None
    match = MAXIMUM_PATHS_RE.search(block)
    maximum_paths = parse_int(match.group(1), "maximum-paths") if match else None

    passive_default = PASSIVE_DEFAULT_RE.search(block) is not None
    if passive_default:
        active = ACTIVE_RE.findall(block)
        passive = [name for name in enabled if name not in active]
    else:
        passive = PASSIVE_RE.findall(block)
        active = [name for name in enabled if name not in passive]

    return OspfInstanceRecord.from_fields(
        name=instance,
        router_id=router_id,
        max_lsa=max_lsa,
        maximum_paths=maximum_paths,
        passive_interface_default=passive_default,
        active_interfaces=active,
        passive_interfaces=passive,
        redistribution={proto: route_map or None for proto, route_map in REDISTRIBUTE_RE.findall(block)},
        areas=parse_areas(block),
    )


def parse_network_type(name: str, block: str) -> OspfInterfaceRecord:
    network_type = "point_to_point" if POINT_TO_POINT in child_lines(block) else "broadcast"
    return OspfInterfaceRecord.from_fields(name=name, network_type=network_type)


def _context(instance: str) -> str:
    return f"router ospf {instance}"


def router_id_commands(instance: str, value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(_context(instance), "router-id", value, default)


def max_lsa_commands(instance: str, value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(_context(instance), "max-lsa", value, default)


def maximum_paths_commands(instance: str, value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(_context(instance), "maximum-paths", value, default)


def passive_default_commands(
    instance: str,
    value: Optional[bool] = None,
    default: bool = False,
    explicit: Optional[list[str]] = None,
) -> list[str]:
    """Switch ``passive-interface default`` on or off.

    ``explicit`` names the interfaces carrying a per-interface line under the
    current mode (passive ones without the default, active ones with it).
    Those lines are cleared before the mode changes, so afterwards every
    enabled interface follows the new default.
    """
    commands = [_context(instance)]
    undo = "no passive-interface" if value and not default else "passive-interface"
    commands.extend(f"{undo} {name}" for name in explicit or [])
    return commands + flag_commands(None, "passive-interface default", value, default)


def passive_interfaces_commands(instance: str, values: list[str], current: list[str]) -> list[str]:
    """Un-passive every current passive interface, then mark the desired ones."""
    commands = [_context(instance)]
    commands.extend(f"no passive-interface {name}" for name in current)
    commands.extend(f"passive-interface {name}" for name in values)
    return commands


def active_interfaces_commands(instance: str, values: list[str], current: list[str]) -> list[str]:
    """Mirror image of passive_interfaces_commands."""
    commands = [_context(instance)]
    commands.extend(f"passive-interface {name}" for name in current)
    commands.extend(f"no passive-interface {name}" for name in values)
    return commands


def redistribution_commands(
    instance: str,
    values: dict[str, Optional[str]],
    current: dict[str, Optional[str]],
) -> list[str]:
    commands = [_context(instance)]
    commands.extend(f"no redistribute {proto}" for proto in current)
    for proto, route_map in values.items():
        if route_map:
            commands.append(f"redistribute {proto} route-map {route_map}")
        else:
            commands.append(f"redistribute {proto}")
    return commands


def network_commands(instance: str, network: str, area: str, remove: bool = False) -> list[str]:
    prefix = "no " if remove else ""
    return [_context(instance), f"{prefix}network {network} area {area}"]


def network_type_commands(name: str, value: Optional[str] = None, default: bool = False) -> list[str]:
    context = f"interface {name}"
    if default:
        return [context, "default ip ospf network"]
    if value == "point_to_point":
        return [context, POINT_TO_POINT]
    return [context, "no ip ospf network"]


class Ospf:
    """OSPF configuration of a node."""

    def __init__(self, node):
        self.node = node

    def instances(self) -> dict[str, OspfInstanceRecord]:
        config = self.node.running_config()
        ids = INSTANCE_RE.findall(config)
        if not ids:
            return {}

        reply = self.node.enable(["show ip ospf interface"])[0]
        result = {}
        for instance in ids:
            block = self.node.get_block(_context(instance))
            if block is None:
                logger.debug(f"router ospf {instance} has no terminated block")
                continue
            result[instance] = parse_instance(instance, block, enabled_interfaces(reply, instance))
        return result

    def get(self, instance: str) -> Optional[OspfInstanceRecord]:
        return self.instances().get(str(instance))

    def networks(self) -> dict[str, OspfNetworkRecord]:
        """Network statements of every instance, keyed by network."""
        result = {}
        for instance, record in self.instances().items():
            for area, networks in (record.areas or {}).items():
                for network in networks:
                    result[network] = OspfNetworkRecord.from_fields(
                        name=network, area=area, instance=instance
                    )
        return result

    def interfaces(self) -> dict[str, OspfInterfaceRecord]:
        result = {}
        for name in interface_names(self.node.running_config()):
            if name.startswith("Ma"):
                continue
            block = self.node.get_block(f"interface {name}")
            if block is not None:
                result[name] = parse_network_type(name, block)
        return result

    def getall(self) -> dict:
        """Nested view: instances (with their areas) and interfaces."""
        return {
            "instances": self.instances(),
            "interfaces": self.interfaces(),
        }

    def create(self, instance: str) -> bool:
        return self.node.configure([_context(instance)])

    def delete(self, instance: str) -> bool:
        return self.node.configure([f"no router ospf {instance}"])

    def default(self, instance: str) -> bool:
        return self.node.configure([f"default router ospf {instance}"])

    def set_router_id(self, instance: str, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(router_id_commands(instance, value, default))

    def set_max_lsa(self, instance: str, value: Optional[int] = None, default: bool = False) -> bool:
        return self.node.configure(max_lsa_commands(instance, value, default))

    def set_maximum_paths(self, instance: str, value: Optional[int] = None, default: bool = False) -> bool:
        return self.node.configure(maximum_paths_commands(instance, value, default))

    def set_passive_interface_default(
        self,
        instance: str,
        value: Optional[bool] = None,
        default: bool = False,
        explicit: Optional[list[str]] = None,
    ) -> bool:
        return self.node.configure(passive_default_commands(instance, value, default, explicit))

    def set_passive_interfaces(self, instance: str, values: list[str], current: list[str]) -> bool:
        return self.node.configure(passive_interfaces_commands(instance, values, current))

    def set_active_interfaces(self, instance: str, values: list[str], current: list[str]) -> bool:
        return self.node.configure(active_interfaces_commands(instance, values, current))

    def set_redistribution(self, instance: str, values: dict, current: dict) -> bool:
        return self.node.configure(redistribution_commands(instance, values, current))

    def add_network(self, instance: str, network: str, area: str) -> bool:
        return self.node.configure(network_commands(instance, network, area))

    def remove_network(self, instance: str, network: str, area: str) -> bool:
        return self.node.configure(network_commands(instance, network, area, remove=True))

    def set_network_type(self, name: str, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(network_type_commands(name, value, default))
