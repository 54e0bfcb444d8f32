"""Interface settings: description, admin state, speed and LACP priority.

Speed and LACP port priority only exist on Ethernet interfaces, so they are
only read for names starting with ``Et``.
"""
import logging
import re
from typing import Optional

from .block import child_lines
from .commands import attribute_commands, flag_commands, parse_int
from .schema import InterfaceRecord

logger = logging.getLogger(__name__)

INTERFACE_RE = re.compile(r"^interface (.+)$", re.M)
DESCRIPTION_RE = re.compile(r"^\s+description (.+)$", re.M)
SPEED_RE = re.compile(r"^\s+speed (.+)$", re.M)
LACP_PRIORITY_RE = re.compile(r"^\s+lacp port-priority (\S+)$", re.M)

PHYSICAL_PREFIXES = ("Et", "Ma")


def is_ethernet(name: str) -> bool:
    return name.startswith("Et")


def is_physical(name: str) -> bool:
    return name.startswith(PHYSICAL_PREFIXES)


def interface_names(config: str) -> list[str]:
    """Every interface with a block in the running config."""
    return INTERFACE_RE.findall(config)


def parse_interface(name: str, block: str) -> InterfaceRecord:
    """Build an interface record from its config block."""
    match = DESCRIPTION_RE.search(block)
    fields = {
        "name": name,
        "description": match.group(1) if match else "",
        "shutdown": "no shutdown" not in child_lines(block),
    }

    if is_ethernet(name):
        match = SPEED_RE.search(block)
        fields["speed"] = match.group(1) if match else "default"
        match = LACP_PRIORITY_RE.search(block)
        fields["lacp_priority"] = parse_int(match.group(1), "lacp port-priority") if match else None

    return InterfaceRecord.from_fields(**fields)


def description_commands(name: str, value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(f"interface {name}", "description", value, default)


def shutdown_commands(name: str, value: Optional[bool] = None, default: bool = False) -> list[str]:
    return flag_commands(f"interface {name}", "shutdown", value, default)


def speed_commands(name: str, value: Optional[str] = None, default: bool = False) -> list[str]:
    """``"default"`` is what the parser reports for an unset speed, so it clears."""
    if value == "default":
        value = None
    return attribute_commands(f"interface {name}", "speed", value, default)


def lacp_priority_commands(name: str, value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(f"interface {name}", "lacp port-priority", value, default)


class Interface:
    """Read and configure interfaces on a node."""

    def __init__(self, node):
        self.node = node

    def get(self, name: str) -> Optional[InterfaceRecord]:
        """Interface record, or None when the interface has no config block."""
        block = self.node.get_block(f"interface {name}")
        if block is None:
            return None
        return parse_interface(name, block)

    def getall(self) -> dict[str, InterfaceRecord]:
        result = {}
        for name in interface_names(self.node.running_config()):
            record = self.get(name)
            if record is not None:
                result[name] = record
        return result

    def create(self, name: str) -> bool:
        """Create a logical interface. Physical interfaces cannot be created."""
        if is_physical(name):
            logger.warning(f"Refusing to create physical interface {name}")
            return False
        return self.node.configure([f"interface {name}"])

    def delete(self, name: str) -> bool:
        """Delete a logical interface. Physical interfaces cannot be deleted."""
        if is_physical(name):
            logger.warning(f"Refusing to delete physical interface {name}")
            return False
        return self.node.configure([f"no interface {name}"])

    def default(self, name: str) -> bool:
        return self.node.configure([f"default interface {name}"])

    def set_description(self, name: str, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(description_commands(name, value, default))

    def set_shutdown(self, name: str, value: Optional[bool] = None, default: bool = False) -> bool:
        return self.node.configure(shutdown_commands(name, value, default))

    def set_speed(self, name: str, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(speed_commands(name, value, default))

    def set_lacp_priority(self, name: str, value: Optional[int] = None, default: bool = False) -> bool:
        return self.node.configure(lacp_priority_commands(name, value, default))
