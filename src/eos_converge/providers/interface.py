"""Interface and IP interface providers."""
from ..errors import ValidationError
from ..resources.interface import Interface, is_physical
from ..resources.ipinterface import IpInterface
from ..resources.schema import InterfaceRecord, IpInterfaceRecord, Record
from .base import ImmediateProvider


class InterfaceProvider(ImmediateProvider):
    resource_type = "eos_interface"
    record_class = InterfaceRecord
    api_class = Interface
    properties = ("description", "shutdown", "speed", "lacp_priority")

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Interface(node).getall().values())

    def _create(self, desired: Record) -> None:
        if is_physical(self.name):
            raise ValidationError(f"{self.name} is a physical interface and cannot be created")
        super()._create(desired)

    def _destroy(self) -> None:
        if is_physical(self.name):
            raise ValidationError(f"{self.name} is a physical interface and cannot be removed")
        super()._destroy()


class IpInterfaceProvider(ImmediateProvider):
    resource_type = "eos_ipinterface"
    record_class = IpInterfaceRecord
    api_class = IpInterface
    properties = ("address", "mtu", "helper_addresses")

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, IpInterface(node).getall().values())
