"""Provider adapters between the reconciler and the resource modules.

Two styles exist:

* ``ImmediateProvider``: every setter sends its commands right away and
  updates the cached record.
* ``BatchedProvider``: ``create``/``destroy``/``update`` only stage values
  into an immutable ``ChangeSet``. ``flush(changes)`` turns the merged
  state into commands without touching the node, and ``apply(changes)``
  sends them as one batch.

``exists()`` only ever looks at the cached record; it never queries the node.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Iterable, Optional

from ..errors import CommandError, ValidationError
from ..resources.schema import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeSet:
    """Pending changes for one batched resource."""
    ensure: Optional[str] = None
    values: dict[str, Any] = field(default_factory=dict)

    def stage(self, attr: str, value: Any) -> "ChangeSet":
        return replace(self, values={**self.values, attr: value})

    def stage_all(self, values: dict[str, Any]) -> "ChangeSet":
        return replace(self, values={**self.values, **values})

    def with_ensure(self, ensure: str) -> "ChangeSet":
        return replace(self, ensure=ensure)

    def __bool__(self) -> bool:
        return self.ensure is not None or bool(self.values)


class Provider(ABC):
    """Common plumbing: identity, cached record and the module it drives."""

    resource_type: ClassVar[str] = ""
    record_class: ClassVar[type[Record]] = Record
    api_class: ClassVar[type] = object
    properties: ClassVar[tuple[str, ...]] = ()
    identity: ClassVar[tuple[str, ...]] = ()

    def __init__(self, node, current: Optional[Record] = None, name: Optional[str] = None):
        if current is None and name is None:
            raise ValidationError(f"{self.resource_type} needs a name or a current record")
        self.node = node
        self.api = self.api_class(node)
        self.current = current
        self.name = name if name is not None else current.name

    @classmethod
    @abstractmethod
    def instances(cls, node) -> list["Provider"]:
        """One provider per resource currently configured on the node."""
        pass

    @classmethod
    def wrap(cls, node, records: Iterable[Record]) -> list["Provider"]:
        return [cls(node, current=record) for record in records]

    def exists(self) -> bool:
        return self.current is not None

    def check_properties(self, attrs: Iterable[str]) -> None:
        """Reject attributes this resource type cannot manage."""
        allowed = set(self.properties) | set(self.identity)
        unknown = sorted(set(attrs) - allowed)
        if unknown:
            raise ValidationError(
                f"{self.resource_type} {self.name}: unsupported properties {', '.join(unknown)}"
            )

    def validate_identity(self, record: Record, fields: Iterable[str]) -> None:
        missing = [f for f in fields if getattr(record, f) in (None, "")]
        if missing:
            raise ValidationError(
                f"Invalid options for {self.resource_type} {self.name}: missing {', '.join(missing)}"
            )

    def _require(self, ok: bool, action: str) -> None:
        if not ok:
            raise CommandError(f"{self.resource_type} {self.name}: {action} failed")

    def __repr__(self) -> str:
        state = "present" if self.exists() else "absent"
        return f"{type(self).__name__}({self.name!r}, {state})"


class ImmediateProvider(Provider):
    """Applies every change as soon as it is requested."""

    def create(self, desired: Record) -> None:
        managed = {k: v for k, v in desired.managed_fields().items() if k not in self.identity}
        self.check_properties(managed)
        self._create(desired)
        self.current = self.record_class.from_fields(name=self.name)
        for attr in self.properties:
            if managed.get(attr) is not None:
                self.update(attr, managed[attr])

    def destroy(self) -> None:
        self._destroy()
        self.current = None

    def update(self, attr: str, value: Any) -> None:
        """Converge one attribute and record the new value in the cache."""
        self.check_properties([attr])
        setter = getattr(self, f"set_{attr}", None)
        if setter is not None:
            setter(value)
        else:
            self._require(getattr(self.api, f"set_{attr}")(self.name, value), attr)
        if self.current is not None:
            self.current = self.current.model_copy(update={attr: value})

    def _create(self, desired: Record) -> None:
        self._require(self.api.create(self.name), "create")

    def _destroy(self) -> None:
        self._require(self.api.delete(self.name), "delete")


class BatchedProvider(Provider):
    """Stages changes and emits them in a single flush."""

    def create(self, changes: ChangeSet, desired: Record) -> ChangeSet:
        managed = desired.managed_fields()
        self.check_properties(managed)
        return changes.with_ensure("present").stage_all(managed)

    def destroy(self, changes: ChangeSet, desired: Optional[Record] = None) -> ChangeSet:
        return changes.with_ensure("absent")

    def update(self, changes: ChangeSet, attr: str, value: Any) -> ChangeSet:
        self.check_properties([attr])
        return changes.stage(attr, value)

    def desired_state(self, changes: ChangeSet) -> Record:
        """Current record overlaid with the staged changes."""
        if self.current is not None:
            fields = self.current.model_dump()
        else:
            fields = {"name": self.name}
        fields.update(changes.values)
        fields["ensure"] = changes.ensure or ("present" if self.current is not None else "absent")
        return self.record_class.from_fields(**fields)

    @abstractmethod
    def flush(self, changes: ChangeSet) -> list[str]:
        """Commands converging the node to ``desired_state(changes)``."""
        pass

    def apply(self, changes: ChangeSet) -> list[str]:
        """Send the flushed commands and update the cached record."""
        commands = self.flush(changes)
        state = self.desired_state(changes)
        if commands:
            self._require(self.node.configure(commands), "flush")
        self.current = state if state.ensure == "present" else None
        return commands
