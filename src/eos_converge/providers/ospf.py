"""OSPF instance, network and interface providers."""
from ..errors import ValidationError
from ..resources.ospf import Ospf, network_commands
from ..resources.schema import OspfInstanceRecord, OspfInterfaceRecord, OspfNetworkRecord, Record
from .base import BatchedProvider, ChangeSet, ImmediateProvider


class OspfInstanceProvider(ImmediateProvider):
    resource_type = "eos_ospf_instance"
    record_class = OspfInstanceRecord
    api_class = Ospf
    properties = (
        "router_id",
        "max_lsa",
        "maximum_paths",
        "passive_interface_default",
        "passive_interfaces",
        "active_interfaces",
        "redistribution",
    )

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Ospf(node).instances().values())

    def _current(self, attr: str, empty):
        value = getattr(self.current, attr, None) if self.current else None
        return value if value is not None else empty

    def _enabled(self) -> list[str]:
        """Every interface the cached record knows about, active or passive."""
        names = self._current("active_interfaces", []) + self._current("passive_interfaces", [])
        return list(dict.fromkeys(names))

    def _cache_split(self, passive: list[str]) -> None:
        if self.current is None:
            return
        enabled = self._enabled()
        self.current = self.current.model_copy(update={
            "passive_interfaces": list(passive),
            "active_interfaces": [name for name in enabled if name not in passive],
        })

    def set_passive_interface_default(self, value):
        passive_default = bool(self._current("passive_interface_default", False))
        explicit = self._current("active_interfaces" if passive_default else "passive_interfaces", [])
        enabled = self._enabled()
        self._require(
            self.api.set_passive_interface_default(self.name, value, explicit=explicit),
            "passive_interface_default",
        )
        # With the per-interface lines cleared every interface follows the new default
        self._cache_split(enabled if value else [])

    def set_passive_interfaces(self, value):
        current = self._current("passive_interfaces", [])
        self._require(self.api.set_passive_interfaces(self.name, value or [], current), "passive_interfaces")
        self._cache_split(value or [])

    def set_active_interfaces(self, value):
        current = self._current("active_interfaces", [])
        self._require(self.api.set_active_interfaces(self.name, value or [], current), "active_interfaces")
        self._cache_split([name for name in self._enabled() if name not in (value or [])])

    def set_redistribution(self, value):
        current = self._current("redistribution", {})
        self._require(self.api.set_redistribution(self.name, value or {}, current), "redistribution")


class OspfNetworkProvider(BatchedProvider):
    resource_type = "eos_ospf_network"
    record_class = OspfNetworkRecord
    api_class = Ospf
    properties = ("area", "instance")

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Ospf(node).networks().values())

    def flush(self, changes: ChangeSet) -> list[str]:
        state = self.desired_state(changes)
        current = self.current

        if state.ensure == "absent":
            if current is None:
                return []
            return network_commands(current.instance, current.name, current.area, remove=True)

        self.validate_identity(state, ("area", "instance"))
        add = network_commands(state.instance, state.name, state.area)
        if current is None:
            return add
        if (current.area, current.instance) == (state.area, state.instance):
            return []
        return network_commands(current.instance, current.name, current.area, remove=True) + add


class OspfInterfaceProvider(ImmediateProvider):
    resource_type = "eos_ospf_interface"
    record_class = OspfInterfaceRecord
    api_class = Ospf
    properties = ("network_type",)

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Ospf(node).interfaces().values())

    def _create(self, desired: Record) -> None:
        raise ValidationError(f"Interface {self.name} does not exist")

    def _destroy(self) -> None:
        raise ValidationError(f"OSPF settings of {self.name} cannot be removed; set network_type instead")
