"""Typed resource records.

One record class per resource family. Records are immutable values that
reject unknown fields, so a typo in a manifest or a parser bug surfaces as a
ValidationError instead of silently carrying an extra key around.

Every attribute except ``name`` is optional: ``None`` means "not reported"
on the read side and "not managed" on the desired side.
"""
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError


def _text(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _dotted_area(value: Any) -> Any:
    value = _text(value)
    if isinstance(value, str) and value.isdigit():
        number = int(value)
        return ".".join(str((number >> shift) & 0xFF) for shift in (24, 16, 8, 0))
    return value


Text = Annotated[str, BeforeValidator(_text)]
Area = Annotated[str, BeforeValidator(_dotted_area)]
Action = Literal["permit", "deny"]


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "record"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


class Record(BaseModel):
    """Base record: a named resource that is present or absent."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Text
    ensure: Literal["present", "absent"] = "present"

    @classmethod
    def from_fields(cls, **fields: Any) -> "Record":
        """Build a record, converting schema violations to ValidationError."""
        try:
            return cls(**fields)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid {cls.__name__} {fields.get('name')!r}: {_describe(e)}"
            ) from e

    def managed_fields(self) -> dict[str, Any]:
        """Attributes explicitly given when the record was built."""
        return {
            key: getattr(self, key)
            for key in type(self).model_fields
            if key in self.model_fields_set and key not in ("name", "ensure")
        }


class InterfaceRecord(Record):
    description: Optional[str] = None
    shutdown: Optional[bool] = None
    speed: Optional[str] = None
    lacp_priority: Optional[int] = Field(default=None, ge=0, le=65535)


class IpInterfaceRecord(Record):
    address: Optional[str] = None
    mtu: Optional[int] = Field(default=None, ge=68, le=65535)
    helper_addresses: Optional[list[Text]] = None


class SwitchportRecord(Record):
    mode: Optional[Literal["access", "trunk"]] = None
    trunk_allowed_vlans: Optional[list[Text]] = None
    trunk_native_vlan: Optional[int] = Field(default=None, ge=1, le=4094)
    access_vlan: Optional[int] = Field(default=None, ge=1, le=4094)
    trunk_groups: Optional[list[Text]] = None


class VlanRecord(Record):
    vlan_name: Optional[str] = None
    state: Optional[Literal["active", "suspend"]] = None
    trunk_groups: Optional[list[Text]] = None

    @field_validator("vlan_name")
    @classmethod
    def _no_spaces(cls, value: Optional[str]) -> Optional[str]:
        return value.replace(" ", "_") if value else value

    @field_validator("name")
    @classmethod
    def _vlan_id(cls, value: str) -> str:
        if not value.isdigit() or not 1 <= int(value) <= 4094:
            raise ValueError(f"VLAN id must be 1-4094, got {value!r}")
        return str(int(value))


class OspfInstanceRecord(Record):
    router_id: Optional[str] = None
    max_lsa: Optional[int] = Field(default=None, ge=0)
    maximum_paths: Optional[int] = Field(default=None, ge=1)
    passive_interface_default: Optional[bool] = None
    active_interfaces: Optional[list[Text]] = None
    passive_interfaces: Optional[list[Text]] = None
    redistribution: Optional[dict[str, Optional[str]]] = None
    areas: Optional[dict[Area, list[str]]] = None

    @field_validator("name")
    @classmethod
    def _instance_id(cls, value: str) -> str:
        if not value.isdigit() or not 1 <= int(value) <= 65535:
            raise ValueError(f"OSPF instance must be 1-65535, got {value!r}")
        return value


class OspfNetworkRecord(Record):
    area: Optional[Area] = None
    instance: Optional[Text] = None


class OspfInterfaceRecord(Record):
    network_type: Optional[Literal["broadcast", "point_to_point"]] = None


class RoutemapRecord(Record):
    route_map: Optional[str] = None
    seqno: Optional[int] = Field(default=None, ge=0, le=65535)
    action: Optional[Action] = None
    description: Optional[str] = None
    match: Optional[list[str]] = None
    set: Optional[list[str]] = None
    continue_seqno: Optional[int] = Field(default=None, ge=0, le=65535)

    @model_validator(mode="before")
    @classmethod
    def _identity_from_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("name"):
            route_map, _, seqno = str(data["name"]).rpartition(":")
            if route_map:
                data = dict(data)
                if data.get("route_map") is None:
                    data["route_map"] = route_map
                if data.get("seqno") is None:
                    data["seqno"] = seqno
        return data


class PrefixListRecord(Record):
    prefix_list: Optional[str] = None
    seqno: Optional[int] = Field(default=None, ge=0, le=65535)
    action: Optional[Action] = None
    prefix: Optional[str] = None
    masklen: Optional[int] = Field(default=None, ge=0, le=32)
    eq: Optional[int] = Field(default=None, ge=0, le=32)
    ge: Optional[int] = Field(default=None, ge=0, le=32)
    le: Optional[int] = Field(default=None, ge=0, le=32)

    @model_validator(mode="before")
    @classmethod
    def _identity_from_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("name"):
            prefix_list, _, seqno = str(data["name"]).rpartition(":")
            if prefix_list:
                data = dict(data)
                if data.get("prefix_list") is None:
                    data["prefix_list"] = prefix_list
                if data.get("seqno") is None:
                    data["seqno"] = seqno
        return data


class StaticRouteRecord(Record):
    prefix: Optional[str] = None
    masklen: Optional[int] = Field(default=None, ge=0, le=32)
    nexthop: Optional[str] = None
    distance: Optional[int] = Field(default=None, ge=1, le=255)
    tag: Optional[int] = Field(default=None, ge=0, le=4294967295)
    route_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _identity_from_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("name"):
            parts = str(data["name"]).split("/", 2)
            if len(parts) == 3:
                data = dict(data)
                for key, value in zip(("prefix", "masklen", "nexthop"), parts):
                    if data.get(key) is None:
                        data[key] = value
        return data


class StpRecord(Record):
    mode: Optional[Literal["mstp", "rstp", "rapid-pvst", "backup", "none"]] = None


class MstInstanceRecord(Record):
    priority: Optional[int] = Field(default=None, ge=0, le=61440)

    @field_validator("priority")
    @classmethod
    def _priority_step(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value % 4096:
            raise ValueError("priority must be a multiple of 4096")
        return value


class StpInterfaceRecord(Record):
    portfast: Optional[bool] = None


class NtpRecord(Record):
    # "" means no source interface is configured
    source_interface: Optional[str] = None

    @field_validator("source_interface")
    @classmethod
    def _interface_name(cls, value: Optional[str]) -> Optional[str]:
        if value and value[0] not in "EMPLV":
            raise ValueError(f"{value!r} is not an interface name")
        return value


class VxlanRecord(Record):
    source_interface: Optional[str] = None
    multicast_group: Optional[str] = None
    udp_port: Optional[int] = Field(default=None, ge=1, le=65535)
    vlans: Optional[dict[Text, int]] = None

    @field_validator("vlans")
    @classmethod
    def _vni_range(cls, value: Optional[dict[str, int]]) -> Optional[dict[str, int]]:
        for vlan, vni in (value or {}).items():
            if not 1 <= vni <= 16777215:
                raise ValueError(f"VNI for VLAN {vlan} must be 1-16777215, got {vni}")
        return value


class MlagInterfaceRecord(Record):
    mlag_id: Optional[int] = Field(default=None, ge=1, le=2000)
