"""Spanning tree providers: global mode, MST instances and portfast."""
from ..errors import ValidationError
from ..resources.schema import MstInstanceRecord, Record, StpInterfaceRecord, StpRecord
from ..resources.stp import GLOBAL_NAME, Stp
from .base import ImmediateProvider


class StpProvider(ImmediateProvider):
    """Node-wide settings, exposed as the single resource ``settings``."""

    resource_type = "eos_stp"
    record_class = StpRecord
    api_class = Stp
    properties = ("mode",)

    @classmethod
    def instances(cls, node):
        return [cls(node, current=Stp(node).get())]

    def set_mode(self, value):
        self._require(self.api.set_mode(value), "mode")

    def _create(self, desired: Record) -> None:
        raise ValidationError(f"Spanning tree settings are always present; use name {GLOBAL_NAME!r}")

    def _destroy(self) -> None:
        raise ValidationError("Spanning tree settings cannot be removed")


class MstInstanceProvider(ImmediateProvider):
    resource_type = "eos_mst_instance"
    record_class = MstInstanceRecord
    api_class = Stp
    properties = ("priority",)

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Stp(node).instances().values())

    def _create(self, desired: Record) -> None:
        # Instances only exist through their priority line
        if getattr(desired, "priority", None) is None:
            raise ValidationError(f"MST instance {self.name} needs a priority to be created")

    def _destroy(self) -> None:
        self._require(self.api.delete_instance(self.name), "delete")


class StpInterfaceProvider(ImmediateProvider):
    resource_type = "eos_stp_interface"
    record_class = StpInterfaceRecord
    api_class = Stp
    properties = ("portfast",)

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Stp(node).interfaces().values())

    def _create(self, desired: Record) -> None:
        raise ValidationError(f"{self.name} is not a bridged interface")

    def _destroy(self) -> None:
        raise ValidationError(f"Spanning tree settings of {self.name} cannot be removed")
