"""NTP provider: the node-wide ``settings`` resource."""
from ..errors import ValidationError
from ..resources.ntp import GLOBAL_NAME, Ntp
from ..resources.schema import NtpRecord, Record
from .base import ImmediateProvider


class NtpProvider(ImmediateProvider):
    resource_type = "eos_ntp_config"
    record_class = NtpRecord
    api_class = Ntp
    properties = ("source_interface",)

    @classmethod
    def instances(cls, node):
        return [cls(node, current=Ntp(node).get())]

    def set_source_interface(self, value):
        self._require(self.api.set_source_interface(value), "source_interface")

    def _create(self, desired: Record) -> None:
        raise ValidationError(f"NTP settings are always present; use name {GLOBAL_NAME!r}")

    def _destroy(self) -> None:
        raise ValidationError("NTP settings cannot be removed; set source_interface to '' instead")
