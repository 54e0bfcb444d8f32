"""Parser for desired-state manifests.

Manifests are YAML (or an equivalent dict)::

    node: leaf1
    dry_run: false
    resources:
      eos_vlan:
        "100":
          vlan_name: servers
      eos_prefix_list:
        PL-PEERS:10:
          action: permit
          prefix: 10.0.0.0
          masklen: 8
          le: 24

A malformed resource entry does not reject the manifest; it is recorded in
``Manifest.invalid`` and reported as a failed change by the reconciler.
"""
import logging
from pathlib import Path
from typing import Any, Union

import yaml

from ..errors import ParseError, ValidationError
from ..providers import PROVIDERS
from .schema import Manifest

logger = logging.getLogger(__name__)


class ManifestParser:
    """Parse desired state from dict/YAML format."""

    def parse(self, config: dict[str, Any]) -> Manifest:
        """
        Parse a manifest dict into a Manifest.

        Raises:
            ParseError: If the manifest structure is invalid
        """
        if not isinstance(config, dict):
            raise ParseError("Manifest must be a mapping")

        node_id = config.get("node") or config.get("node_id")
        if not node_id:
            raise ParseError("Missing required field: node")

        resources = config.get("resources") or {}
        if not isinstance(resources, dict):
            raise ParseError("'resources' must be a mapping of resource type to resources")

        manifest = Manifest(node_id=str(node_id), dry_run=bool(config.get("dry_run", False)))

        for resource_type, entries in resources.items():
            if resource_type not in PROVIDERS:
                raise ParseError(f"Unknown resource type: {resource_type}")
            if not isinstance(entries, dict):
                raise ParseError(f"{resource_type} must map resource names to attributes")
            self._parse_entries(manifest, resource_type, entries)

        return manifest

    def parse_file(self, path: Union[str, Path]) -> Manifest:
        with open(path) as f:
            config = yaml.safe_load(f)
        if config is None:
            raise ParseError(f"Manifest {path} is empty")
        return self.parse(config)

    def _parse_entries(self, manifest: Manifest, resource_type: str, entries: dict) -> None:
        record_class = PROVIDERS[resource_type].record_class
        records = manifest.resources.setdefault(resource_type, [])

        for name, attrs in entries.items():
            if attrs is not None and not isinstance(attrs, dict):
                manifest.invalid.append((resource_type, str(name), "attributes must be a mapping"))
                continue
            attrs = dict(attrs or {})
            attrs.setdefault("name", str(name))
            try:
                records.append(record_class.from_fields(**attrs))
            except ValidationError as e:
                logger.warning(f"Skipping invalid {resource_type} {name}: {e}")
                manifest.invalid.append((resource_type, str(name), str(e)))
