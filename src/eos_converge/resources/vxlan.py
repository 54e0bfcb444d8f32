"""The Vxlan1 tunnel interface."""
import re
from typing import Optional

from .block import extract_block, literal
from .commands import attribute_commands, parse_int
from .schema import VxlanRecord

VXLAN_NAME = "Vxlan1"

SOURCE_INTERFACE_RE = re.compile(r"^\s+vxlan source-interface (\S+)$", re.M)
MULTICAST_GROUP_RE = re.compile(r"^\s+vxlan multicast-group (\S+)$", re.M)
UDP_PORT_RE = re.compile(r"^\s{3}vxlan udp-port (\S+)$", re.M)
VLAN_VNI_RE = re.compile(r"^\s+vxlan vlan (\S+) vni (\S+)$", re.M)

CONTEXT = f"interface {VXLAN_NAME}"


def parse_vxlan(output: str) -> Optional[VxlanRecord]:
    """Record from ``show running-config all interfaces Vxlan1``; None if absent."""
    if not output.strip():
        return None
    block = extract_block(output, literal(CONTEXT)) or output

    match = SOURCE_INTERFACE_RE.search(block)
    source_interface = match.group(1) if match else ""
    match = MULTICAST_GROUP_RE.search(block)
    multicast_group = match.group(1) if match else ""
    match = UDP_PORT_RE.search(block)
    udp_port = parse_int(match.group(1), "vxlan udp-port") if match else None

    vlans = {
        str(parse_int(vlan, "vxlan vlan")): parse_int(vni, "vxlan vni")
        for vlan, vni in VLAN_VNI_RE.findall(block)
    }
    return VxlanRecord.from_fields(
        name=VXLAN_NAME,
        source_interface=source_interface,
        multicast_group=multicast_group,
        udp_port=udp_port,
        vlans=vlans,
    )


def source_interface_commands(value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(CONTEXT, "vxlan source-interface", value, default)


def multicast_group_commands(value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(CONTEXT, "vxlan multicast-group", value, default)


def udp_port_commands(value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(CONTEXT, "vxlan udp-port", value, default)


def vlans_commands(values: dict[str, int], current: dict[str, int]) -> list[str]:
    """Drop mappings that are gone or changed, then add the new ones."""
    commands = [CONTEXT]
    for vlan, vni in current.items():
        if values.get(vlan) != vni:
            commands.append(f"no vxlan vlan {vlan} vni")
    for vlan, vni in values.items():
        if current.get(vlan) != vni:
            commands.append(f"vxlan vlan {vlan} vni {vni}")
    return commands


class Vxlan:
    """VXLAN tunnel interface of a node."""

    def __init__(self, node):
        self.node = node

    def get(self) -> Optional[VxlanRecord]:
        reply = self.node.enable(
            [f"show running-config all interfaces {VXLAN_NAME}"], format="text"
        )[0]
        return parse_vxlan(reply.get("output", ""))

    def create(self) -> bool:
        return self.node.configure([CONTEXT])

    def delete(self) -> bool:
        return self.node.configure([f"no {CONTEXT}"])

    def default(self) -> bool:
        return self.node.configure([f"default {CONTEXT}"])

    def set_source_interface(self, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(source_interface_commands(value, default))

    def set_multicast_group(self, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(multicast_group_commands(value, default))

    def set_udp_port(self, value: Optional[int] = None, default: bool = False) -> bool:
        return self.node.configure(udp_port_commands(value, default))

    def update_vlan(self, vlan: str, vni: int) -> bool:
        return self.node.configure([CONTEXT, f"vxlan vlan {vlan} vni {vni}"])

    def remove_vlan(self, vlan: str) -> bool:
        return self.node.configure([CONTEXT, f"no vxlan vlan {vlan} vni"])

    def set_vlans(self, values: dict[str, int], current: dict[str, int]) -> bool:
        return self.node.configure(vlans_commands(values, current))
