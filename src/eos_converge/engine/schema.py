"""Schema definitions for the reconciliation engine."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..resources.schema import Record


class ChangeType(str, Enum):
    """Type of change made to a resource."""
    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"
    NO_CHANGE = "no_change"


@dataclass
class Manifest:
    """Desired state for one node."""
    node_id: str
    dry_run: bool = False
    resources: dict[str, list[Record]] = field(default_factory=dict)
    # (resource_type, name, error) for entries that failed to parse
    invalid: list[tuple[str, str, str]] = field(default_factory=list)

    @property
    def resource_count(self) -> int:
        return sum(len(records) for records in self.resources.values()) + len(self.invalid)


@dataclass
class AttributeChange:
    """A single attribute moving from one value to another."""
    attribute: str
    old: Any
    new: Any


@dataclass
class ResourceChange:
    """Outcome of converging one resource."""
    resource_type: str
    name: str
    change_type: ChangeType = ChangeType.NO_CHANGE
    attributes: list[AttributeChange] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def changed(self) -> bool:
        return self.change_type != ChangeType.NO_CHANGE

    def to_dict(self) -> dict:
        return {
            "resource_type": self.resource_type,
            "name": self.name,
            "change_type": self.change_type.value,
            "attributes": {a.attribute: {"old": a.old, "new": a.new} for a in self.attributes},
            "commands": self.commands,
            "error": self.error,
        }


@dataclass
class RunResult:
    """Outcome of one reconciliation pass over a node."""
    node_id: str
    dry_run: bool = False
    changes: list[ResourceChange] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(change.success for change in self.changes)

    @property
    def failed(self) -> list[ResourceChange]:
        return [change for change in self.changes if not change.success]

    @property
    def changed(self) -> list[ResourceChange]:
        return [change for change in self.changes if change.success and change.changed]

    @property
    def commands(self) -> list[str]:
        return [command for change in self.changes for command in change.commands]

    def to_dict(self) -> dict:
        return {
            "node_id": self.node_id,
            "dry_run": self.dry_run,
            "success": self.success,
            "changes": [change.to_dict() for change in self.changes],
        }
