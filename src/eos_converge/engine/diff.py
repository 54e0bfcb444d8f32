"""Attribute diffing between current and desired records."""
from typing import Any, Optional

from ..resources.schema import Record
from .schema import AttributeChange, ChangeType, RunResult


def insync(current: Any, desired: Any) -> bool:
    """Lists compare regardless of order; everything else by equality."""
    if isinstance(current, list) and isinstance(desired, list):
        return sorted(map(str, current)) == sorted(map(str, desired))
    return current == desired


def attribute_changes(
    current: Optional[Record],
    desired: Record,
    attributes: tuple[str, ...],
) -> list[AttributeChange]:
    """Managed attributes of ``desired`` that differ from ``current``.

    Only attributes named in ``attributes`` are compared, in that order.
    """
    managed = desired.managed_fields()
    changes = []
    for attr in attributes:
        if attr not in managed:
            continue
        old = getattr(current, attr, None) if current is not None else None
        new = managed[attr]
        if not insync(old, new):
            changes.append(AttributeChange(attr, old, new))
    return changes


def summarize_run(result: RunResult) -> str:
    """Generate a human-readable summary of a reconciliation pass."""
    lines = []
    mode = " (dry-run)" if result.dry_run else ""
    lines.append(f"Node {result.node_id}{mode}")

    symbols = {
        ChangeType.CREATE: "[+]",
        ChangeType.DELETE: "[-]",
        ChangeType.MODIFY: "[~]",
    }

    for change in result.changes:
        label = f"{change.resource_type} {change.name}"
        if change.error:
            lines.append(f"  [!] {label}: {change.error}")
            continue
        if not change.changed:
            continue
        lines.append(f"  {symbols[change.change_type]} {label}")
        for attr in change.attributes:
            lines.append(f"      {attr.attribute}: {attr.old!r} -> {attr.new!r}")

    if len(lines) == 1:
        lines.append("  No changes needed")

    lines.append(
        f"{len(result.changed)} changed, {len(result.failed)} failed, "
        f"{len(result.changes)} total"
    )
    return "\n".join(lines)
