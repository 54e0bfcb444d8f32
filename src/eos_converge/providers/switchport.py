"""Switchport provider."""
from ..resources.schema import SwitchportRecord
from ..resources.switchport import Switchport
from .base import ImmediateProvider


class SwitchportProvider(ImmediateProvider):
    resource_type = "eos_switchport"
    record_class = SwitchportRecord
    api_class = Switchport
    properties = ("mode", "trunk_allowed_vlans", "trunk_native_vlan", "access_vlan", "trunk_groups")

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Switchport(node).getall().values())
