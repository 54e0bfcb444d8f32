"""Spanning tree: global mode, MST instance priorities and interface portfast."""
import re
from typing import Optional

from .commands import attribute_commands, flag_commands, parse_int
from .schema import MstInstanceRecord, StpInterfaceRecord, StpRecord

MODE_RE = re.compile(r"spanning-tree mode (\S+)$", re.M)
MST_PRIORITY_RE = re.compile(r"^spanning-tree mst (\S+) priority (\S+)$", re.M)
PORTFAST_RE = re.compile(r"^\s+spanning-tree portfast$", re.M)

GLOBAL_NAME = "settings"


def parse_mode(output: str) -> Optional[str]:
    match = MODE_RE.search(output)
    return match.group(1) if match else None


def parse_mst_instances(config: str) -> dict[str, MstInstanceRecord]:
    result = {}
    for instance, priority in MST_PRIORITY_RE.findall(config):
        instance = str(parse_int(instance, "mst instance"))
        result[instance] = MstInstanceRecord.from_fields(
            name=instance, priority=parse_int(priority, "mst priority")
        )
    return result


def parse_portfast(name: str, block: Optional[str]) -> StpInterfaceRecord:
    portfast = PORTFAST_RE.search(block or "") is not None
    return StpInterfaceRecord.from_fields(name=name, portfast=portfast)


def mode_commands(value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(None, "spanning-tree mode", value, default)


def priority_commands(instance: str, value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(None, f"spanning-tree mst {instance} priority", value, default)


def delete_instance_commands(instance: str) -> list[str]:
    return ["spanning-tree mst configuration", f"no instance {instance}", "exit"]


def portfast_commands(name: str, value: Optional[bool] = None, default: bool = False) -> list[str]:
    return flag_commands(f"interface {name}", "spanning-tree portfast", value, default)


class Stp:
    """Spanning tree settings of a node."""

    def __init__(self, node):
        self.node = node

    def get(self) -> StpRecord:
        reply = self.node.enable(
            ["show running-config section spanning-tree mode"], format="text"
        )[0]
        return StpRecord.from_fields(name=GLOBAL_NAME, mode=parse_mode(reply.get("output", "")))

    def instances(self) -> dict[str, MstInstanceRecord]:
        return parse_mst_instances(self.node.running_config())

    def interfaces(self) -> dict[str, StpInterfaceRecord]:
        reply = self.node.enable(["show interfaces"])[0]
        result = {}
        for name, attrs in reply.get("interfaces", {}).items():
            if attrs.get("forwardingModel") != "bridged":
                continue
            result[name] = parse_portfast(name, self.node.get_block(f"interface {name}"))
        return result

    def getall(self) -> dict:
        return {
            "mode": self.get().mode,
            "instances": self.instances(),
            "interfaces": self.interfaces(),
        }

    def set_mode(self, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(mode_commands(value, default))

    def set_priority(self, instance: str, value: Optional[int] = None, default: bool = False) -> bool:
        return self.node.configure(priority_commands(instance, value, default))

    def delete_instance(self, instance: str) -> bool:
        return self.node.configure(delete_instance_commands(instance))

    def set_portfast(self, name: str, value: Optional[bool] = None, default: bool = False) -> bool:
        return self.node.configure(portfast_commands(name, value, default))
