"""Layer 3 interface settings: address, MTU and DHCP helpers."""
import re
from typing import Optional

from .commands import attribute_commands, parse_int, replace_list_commands
from .schema import IpInterfaceRecord

ADDRESS_RE = re.compile(r"^\s+ip address (\S+)$", re.M)
MTU_RE = re.compile(r"^\s+mtu (\S+)$", re.M)
HELPER_RE = re.compile(r"^\s+ip helper-address (\S+)$", re.M)

SWITCHABLE_PREFIXES = ("Et", "Po")


def parse_ipinterface(name: str, block: str) -> IpInterfaceRecord:
    match = ADDRESS_RE.search(block)
    address = match.group(1) if match else None
    match = MTU_RE.search(block)
    mtu = parse_int(match.group(1), "mtu") if match else None
    return IpInterfaceRecord.from_fields(
        name=name,
        address=address,
        mtu=mtu,
        helper_addresses=HELPER_RE.findall(block),
    )


def address_commands(name: str, value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(f"interface {name}", "ip address", value, default)


def mtu_commands(name: str, value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(f"interface {name}", "mtu", value, default)


def helper_addresses_commands(name: str, values: Optional[list[str]]) -> list[str]:
    return replace_list_commands(f"interface {name}", "ip helper-address", values)


class IpInterface:
    """Routed interfaces on a node."""

    def __init__(self, node):
        self.node = node

    def routed_interfaces(self) -> list[str]:
        reply = self.node.enable(["show interfaces"])[0]
        return [
            name for name, attrs in reply.get("interfaces", {}).items()
            if attrs.get("forwardingModel") == "routed"
        ]

    def get(self, name: str) -> Optional[IpInterfaceRecord]:
        block = self.node.get_block(f"interface {name}")
        if block is None:
            return None
        return parse_ipinterface(name, block)

    def getall(self) -> dict[str, IpInterfaceRecord]:
        result = {}
        for name in self.routed_interfaces():
            record = self.get(name)
            if record is not None:
                result[name] = record
        return result

    def create(self, name: str) -> bool:
        commands = [f"interface {name}"]
        if name.startswith(SWITCHABLE_PREFIXES):
            commands.append("no switchport")
        return self.node.configure(commands)

    def delete(self, name: str) -> bool:
        commands = [f"interface {name}", "no ip address"]
        if name.startswith(SWITCHABLE_PREFIXES):
            commands.append("switchport")
        return self.node.configure(commands)

    def set_address(self, name: str, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(address_commands(name, value, default))

    def set_mtu(self, name: str, value: Optional[int] = None, default: bool = False) -> bool:
        return self.node.configure(mtu_commands(name, value, default))

    def set_helper_addresses(self, name: str, values: Optional[list[str]] = None) -> bool:
        return self.node.configure(helper_addresses_commands(name, values))
