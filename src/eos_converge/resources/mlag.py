"""MLAG membership of port-channel interfaces."""
from typing import Optional

from .commands import attribute_commands, parse_int
from .schema import MlagInterfaceRecord


def parse_mlag_interfaces(reply: dict) -> dict[str, MlagInterfaceRecord]:
    """Records from ``show mlag interfaces`` keyed by local interface."""
    result = {}
    for mlag_id, attrs in reply.get("interfaces", {}).items():
        name = attrs.get("localInterface")
        if not name:
            continue
        result[name] = MlagInterfaceRecord.from_fields(
            name=name, mlag_id=parse_int(mlag_id, "mlag id")
        )
    return result


def mlag_id_commands(name: str, value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(f"interface {name}", "mlag", value, default)


class Mlag:
    """MLAG interfaces of a node."""

    def __init__(self, node):
        self.node = node

    def interfaces(self) -> dict[str, MlagInterfaceRecord]:
        return parse_mlag_interfaces(self.node.enable(["show mlag interfaces"])[0])

    def set_mlag_id(self, name: str, value: Optional[int] = None, default: bool = False) -> bool:
        return self.node.configure(mlag_id_commands(name, value, default))
