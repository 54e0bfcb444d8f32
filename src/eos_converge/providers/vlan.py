"""VLAN provider."""
from ..resources.schema import VlanRecord
from ..resources.vlan import Vlan
from .base import ImmediateProvider


class VlanProvider(ImmediateProvider):
    resource_type = "eos_vlan"
    record_class = VlanRecord
    api_class = Vlan
    properties = ("vlan_name", "state", "trunk_groups")

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Vlan(node).getall().values())

    def set_vlan_name(self, value):
        self._require(self.api.set_name(self.name, value), "vlan_name")
