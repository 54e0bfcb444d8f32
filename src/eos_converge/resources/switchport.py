"""Layer 2 switchport settings.

Mode and VLAN assignment are read from the operational ``show interfaces
NAME switchport`` text; allowed VLANs and trunk groups come from the
running-config block.
"""
import re
from typing import Optional

from .commands import attribute_commands, parse_int, replace_list_commands
from .schema import SwitchportRecord

MODE_RE = re.compile(r"^Operational Mode:\s([\w ]+)$", re.M)
NATIVE_VLAN_RE = re.compile(r"^Trunking Native Mode VLAN:\s(\d+)", re.M)
ACCESS_VLAN_RE = re.compile(r"^Access Mode VLAN:\s(\d+)", re.M)
ALLOWED_VLANS_RE = re.compile(r"^\s+switchport trunk allowed vlan (.+)$", re.M)
TRUNK_GROUP_RE = re.compile(r"^\s+switchport trunk group (\S+)$", re.M)


def parse_mode(output: str) -> str:
    """Only ``static access`` is an access port; everything else is a trunk."""
    match = MODE_RE.search(output)
    if match and match.group(1).strip() == "static access":
        return "access"
    return "trunk"


def parse_allowed_vlans(block: str) -> Optional[list[str]]:
    match = ALLOWED_VLANS_RE.search(block)
    if match is None:
        return None
    value = match.group(1).strip()
    if value == "none":
        return []
    return value.split(",")


def parse_switchport(name: str, output: str, block: Optional[str]) -> SwitchportRecord:
    match = NATIVE_VLAN_RE.search(output)
    native = parse_int(match.group(1), "native vlan") if match else None
    match = ACCESS_VLAN_RE.search(output)
    access = parse_int(match.group(1), "access vlan") if match else None

    block = block or ""
    return SwitchportRecord.from_fields(
        name=name,
        mode=parse_mode(output),
        trunk_native_vlan=native,
        access_vlan=access,
        trunk_allowed_vlans=parse_allowed_vlans(block),
        trunk_groups=TRUNK_GROUP_RE.findall(block),
    )


def mode_commands(name: str, value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(f"interface {name}", "switchport mode", value, default)


def access_vlan_commands(name: str, value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(f"interface {name}", "switchport access vlan", value, default)


def trunk_native_vlan_commands(name: str, value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(f"interface {name}", "switchport trunk native vlan", value, default)


def trunk_allowed_vlans_commands(name: str, values: Optional[list[str]] = None, default: bool = False) -> list[str]:
    """Clear the allowed list, then add the desired VLANs back.

    None restores the default (all VLANs allowed).
    """
    context = f"interface {name}"
    if default:
        return [context, "default switchport trunk allowed vlan"]
    if values is None:
        return [context, "no switchport trunk allowed vlan"]
    commands = [context, "switchport trunk allowed vlan none"]
    if values:
        commands.append(f"switchport trunk allowed vlan add {','.join(str(v) for v in values)}")
    return commands


def trunk_groups_commands(name: str, values: Optional[list[str]] = None) -> list[str]:
    return replace_list_commands(f"interface {name}", "switchport trunk group", values)


class Switchport:
    """Bridged interfaces on a node."""

    def __init__(self, node):
        self.node = node

    def bridged_interfaces(self) -> list[str]:
        reply = self.node.enable(["show interfaces"])[0]
        return [
            name for name, attrs in reply.get("interfaces", {}).items()
            if attrs.get("forwardingModel") == "bridged"
        ]

    def get(self, name: str) -> Optional[SwitchportRecord]:
        reply = self.node.enable([f"show interfaces {name} switchport"], format="text")[0]
        output = reply.get("output", "")
        if not output.strip():
            return None
        return parse_switchport(name, output, self.node.get_block(f"interface {name}"))

    def getall(self) -> dict[str, SwitchportRecord]:
        names = self.bridged_interfaces()
        if not names:
            return {}
        replies = self.node.enable(
            [f"show interfaces {name} switchport" for name in names], format="text"
        )
        return {
            name: parse_switchport(name, reply.get("output", ""), self.node.get_block(f"interface {name}"))
            for name, reply in zip(names, replies)
        }

    def create(self, name: str) -> bool:
        return self.node.configure([f"interface {name}", "no ip address", "switchport"])

    def delete(self, name: str) -> bool:
        return self.node.configure([f"interface {name}", "no switchport"])

    def default(self, name: str) -> bool:
        return self.node.configure([f"interface {name}", "default switchport"])

    def set_mode(self, name: str, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(mode_commands(name, value, default))

    def set_access_vlan(self, name: str, value: Optional[int] = None, default: bool = False) -> bool:
        return self.node.configure(access_vlan_commands(name, value, default))

    def set_trunk_native_vlan(self, name: str, value: Optional[int] = None, default: bool = False) -> bool:
        return self.node.configure(trunk_native_vlan_commands(name, value, default))

    def set_trunk_allowed_vlans(self, name: str, values: Optional[list[str]] = None, default: bool = False) -> bool:
        return self.node.configure(trunk_allowed_vlans_commands(name, values, default))

    def set_trunk_groups(self, name: str, values: Optional[list[str]] = None) -> bool:
        return self.node.configure(trunk_groups_commands(name, values))
