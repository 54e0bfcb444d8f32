"""VXLAN tunnel interface provider."""
from ..errors import ValidationError
from ..resources.schema import Record, VxlanRecord
from ..resources.vxlan import VXLAN_NAME, Vxlan
from .base import ImmediateProvider


class VxlanProvider(ImmediateProvider):
    resource_type = "eos_vxlan"
    record_class = VxlanRecord
    api_class = Vxlan
    properties = ("source_interface", "multicast_group", "udp_port", "vlans")

    @classmethod
    def instances(cls, node):
        record = Vxlan(node).get()
        return [] if record is None else [cls(node, current=record)]

    def _create(self, desired: Record) -> None:
        if self.name != VXLAN_NAME:
            raise ValidationError(f"Only {VXLAN_NAME} is supported, got {self.name}")
        self._require(self.api.create(), "create")

    def _destroy(self) -> None:
        self._require(self.api.delete(), "delete")

    def set_source_interface(self, value):
        self._require(self.api.set_source_interface(value), "source_interface")

    def set_multicast_group(self, value):
        self._require(self.api.set_multicast_group(value), "multicast_group")

    def set_udp_port(self, value):
        self._require(self.api.set_udp_port(value), "udp_port")

    def set_vlans(self, value):
        current = (self.current.vlans if self.current else None) or {}
        self._require(self.api.set_vlans(value or {}, current), "vlans")
