"""VLAN database: names, state and trunk groups."""
from typing import Optional

from .commands import attribute_commands, replace_list_commands
from .schema import VlanRecord

STATUS_TO_STATE = {
    "active": "active",
    "suspended": "suspend",
    "suspend": "suspend",
}


def parse_vlans(vlans_reply: dict, groups_reply: dict) -> dict[str, VlanRecord]:
    """Merge ``show vlan`` and ``show vlan trunk group`` JSON replies."""
    trunk_groups = groups_reply.get("trunkGroups", {})
    result = {}
    for vid, attrs in vlans_reply.get("vlans", {}).items():
        status = attrs.get("status")
        result[str(vid)] = VlanRecord.from_fields(
            name=str(vid),
            vlan_name=attrs.get("name"),
            state=STATUS_TO_STATE.get(status, status),
            trunk_groups=list(trunk_groups.get(vid, {}).get("names", [])),
        )
    return result


def vlan_name_commands(vid: str, value: Optional[str] = None, default: bool = False) -> list[str]:
    """VLAN names cannot contain spaces; they are replaced with underscores."""
    if value:
        value = value.replace(" ", "_")
    return attribute_commands(f"vlan {vid}", "name", value, default)


def state_commands(vid: str, value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(f"vlan {vid}", "state", value, default)


def trunk_groups_commands(vid: str, values: Optional[list[str]] = None) -> list[str]:
    return replace_list_commands(f"vlan {vid}", "trunk group", values)


class Vlan:
    """VLANs configured on a node."""

    def __init__(self, node):
        self.node = node

    def getall(self) -> dict[str, VlanRecord]:
        vlans, groups = self.node.enable(["show vlan", "show vlan trunk group"])
        return parse_vlans(vlans, groups)

    def get(self, vid: str) -> Optional[VlanRecord]:
        return self.getall().get(str(vid))

    def create(self, vid: str) -> bool:
        return self.node.configure([f"vlan {vid}"])

    def delete(self, vid: str) -> bool:
        return self.node.configure([f"no vlan {vid}"])

    def default(self, vid: str) -> bool:
        return self.node.configure([f"default vlan {vid}"])

    def set_name(self, vid: str, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(vlan_name_commands(vid, value, default))

    def set_state(self, vid: str, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(state_commands(vid, value, default))

    def set_trunk_groups(self, vid: str, values: Optional[list[str]] = None) -> bool:
        return self.node.configure(trunk_groups_commands(vid, values))
