"""Reconciler - converges a node to a desired-state manifest.

One pass per node:
1. For each resource type present in the manifest (in registry order),
   read the current instances once
2. For each desired resource, pick the matching provider (or a fresh one)
3. Create, destroy or update attributes, immediately or via a flushed
   change set depending on the provider style
4. Record the commands issued and the outcome per resource

A failing resource is reported and the pass moves on to the next one.
"""
import logging
from typing import Optional

from ..errors import EosError
from ..node import Node
from ..providers import PROVIDERS, BatchedProvider, ChangeSet, ImmediateProvider, Provider
from ..resources.schema import Record
from ..utils.audit_log import ChangeTracker
from ..utils.logging_config import timed_section
from .diff import attribute_changes
from .schema import ChangeType, Manifest, ResourceChange, RunResult

logger = logging.getLogger(__name__)


class Reconciler:
    """
    Drive providers to converge one node.

    Usage:
        reconciler = Reconciler(node)
        result = reconciler.run(ManifestParser().parse_file("leaf1.yaml"))
    """

    def __init__(self, node: Node, tracker: Optional[ChangeTracker] = None):
        self.node = node
        self.tracker = tracker

    def run(self, manifest: Manifest) -> RunResult:
        result = RunResult(node_id=self.node.node_id, dry_run=self.node.dry_run)
        logger.info(
            f"[{self.node.node_id}] Converging {manifest.resource_count} resources"
            f"{' (dry-run)' if self.node.dry_run else ''}"
        )

        for resource_type, name, error in manifest.invalid:
            result.changes.append(ResourceChange(resource_type, name, error=error))

        self.node.refresh()
        for resource_type, provider_class in PROVIDERS.items():
            desired_records = manifest.resources.get(resource_type)
            if not desired_records:
                continue
            with timed_section("converge", node_id=self.node.node_id, resource_type=resource_type):
                result.changes.extend(self._converge_type(provider_class, desired_records))

        logger.info(
            f"[{self.node.node_id}] Done: {len(result.changed)} changed, "
            f"{len(result.failed)} failed"
        )
        return result

    def _converge_type(self, provider_class: type[Provider], desired_records: list[Record]) -> list[ResourceChange]:
        resource_type = provider_class.resource_type
        try:
            existing = {p.name: p for p in provider_class.instances(self.node)}
        except EosError as e:
            logger.error(f"[{self.node.node_id}] Failed to read {resource_type}: {e}")
            return [
                ResourceChange(resource_type, desired.name, error=f"Failed to read current state: {e}")
                for desired in desired_records
            ]

        changes = []
        for desired in desired_records:
            provider = existing.get(desired.name) or provider_class(self.node, name=desired.name)
            change = self.converge(provider, desired)
            self._audit(change)
            changes.append(change)
        return changes

    def converge(self, provider: Provider, desired: Record) -> ResourceChange:
        """Converge a single resource, capturing every command it sends."""
        change = ResourceChange(provider.resource_type, provider.name)
        mark = len(self.node.history)

        try:
            provider.check_properties(desired.managed_fields())
            if isinstance(provider, BatchedProvider):
                self._converge_batched(provider, desired, change)
            elif isinstance(provider, ImmediateProvider):
                self._converge_immediate(provider, desired, change)
        except EosError as e:
            logger.error(f"[{self.node.node_id}] {provider.resource_type} {provider.name}: {e}")
            change.error = str(e)

        change.commands = [command for batch in self.node.history[mark:] for command in batch]
        return change

    def _converge_immediate(self, provider: ImmediateProvider, desired: Record, change: ResourceChange) -> None:
        if desired.ensure == "absent":
            if provider.exists():
                provider.destroy()
                change.change_type = ChangeType.DELETE
            return

        if not provider.exists():
            change.attributes = attribute_changes(None, desired, provider.properties)
            provider.create(desired)
            change.change_type = ChangeType.CREATE
            return

        # Compared against the cache as each earlier setter left it
        for name in provider.properties:
            for attr in attribute_changes(provider.current, desired, (name,)):
                provider.update(attr.attribute, attr.new)
                change.attributes.append(attr)
        if change.attributes:
            change.change_type = ChangeType.MODIFY

    def _converge_batched(self, provider: BatchedProvider, desired: Record, change: ResourceChange) -> None:
        changes = ChangeSet()

        if desired.ensure == "absent":
            if not provider.exists():
                return
            changes = provider.destroy(changes, desired)
            change.change_type = ChangeType.DELETE
        elif not provider.exists():
            change.attributes = attribute_changes(None, desired, provider.properties)
            changes = provider.create(changes, desired)
            change.change_type = ChangeType.CREATE
        else:
            change.attributes = attribute_changes(provider.current, desired, provider.properties)
            for attr in change.attributes:
                changes = provider.update(changes, attr.attribute, attr.new)
            if change.attributes:
                change.change_type = ChangeType.MODIFY

        if changes:
            provider.apply(changes)

    def _audit(self, change: ResourceChange) -> None:
        if self.tracker is None or not (change.changed or change.error):
            return
        self.tracker.log_change(
            operation=f"{change.change_type.value} {change.resource_type}",
            parameters={
                "name": change.name,
                "attributes": {a.attribute: a.new for a in change.attributes},
            },
            success=change.success,
            commands=change.commands,
            error=change.error,
            dry_run=self.node.dry_run,
        )

    def snapshot(self, resource_types: Optional[list[str]] = None) -> dict[str, dict[str, dict]]:
        """Current state of the node as plain data, keyed by type then name."""
        self.node.refresh()
        result = {}
        for resource_type, provider_class in PROVIDERS.items():
            if resource_types and resource_type not in resource_types:
                continue
            result[resource_type] = {
                provider.name: provider.current.model_dump(exclude={"name", "ensure"}, exclude_none=True)
                for provider in provider_class.instances(self.node)
            }
        return result
