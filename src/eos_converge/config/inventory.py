"""Node inventory management from YAML configuration."""
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from ..node import Node
from ..transport import create_transport

logger = logging.getLogger(__name__)

INVENTORY_ENV = "EOS_CONVERGE_INVENTORY"


class NodeInventory:
    """Manages the node inventory loaded from YAML config.

    ```yaml
    defaults:
      username: admin
      password_env: EOS_PASSWORD
      transport: eapi

    nodes:
      leaf1:
        host: 192.0.2.11
      leaf2:
        host: 192.0.2.12
        transport: ssh

    groups:
      leafs:
        - leaf1
        - leaf2
    ```
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or self._find_config()
        self._config: dict = {}
        self._load_config()

    def _find_config(self) -> str:
        """Find the nodes.yaml config file."""
        search_paths = []
        if os.environ.get(INVENTORY_ENV):
            search_paths.append(Path(os.environ[INVENTORY_ENV]))
        search_paths += [
            Path.cwd() / "configs" / "nodes.yaml",
            Path.cwd() / "nodes.yaml",
            Path.home() / ".config" / "eos-converge" / "nodes.yaml",
        ]

        for path in search_paths:
            if path.exists():
                return str(path)

        raise FileNotFoundError(
            f"Could not find nodes.yaml. Create one in ./configs/nodes.yaml or set {INVENTORY_ENV}"
        )

    def _load_config(self) -> None:
        """Load the YAML configuration and merge defaults into each node."""
        with open(self.config_path) as f:
            self._config = yaml.safe_load(f) or {}

        defaults = self._config.get("defaults", {})
        for node_id, node_config in self._config.get("nodes", {}).items():
            for key, value in defaults.items():
                node_config.setdefault(key, value)

        self._validate_groups()

    def get_node_ids(self) -> list[str]:
        return list(self._config.get("nodes", {}).keys())

    def get_node_config(self, node_id: str) -> dict:
        """Get raw config for a node."""
        nodes = self._config.get("nodes", {})
        if node_id not in nodes:
            raise KeyError(f"Unknown node: {node_id}")
        return nodes[node_id]

    def get_node(self, node_id: str, dry_run: bool = False) -> Node:
        """Create a Node with a fresh transport."""
        config = dict(self.get_node_config(node_id))
        config.setdefault("name", node_id)
        return Node(node_id, create_transport(node_id, config), dry_run=dry_run)

    # === Group Management ===

    def _validate_groups(self) -> None:
        """Warn about group members that reference unknown nodes."""
        nodes = self._config.get("nodes", {})
        for group_name, members in self._config.get("groups", {}).items():
            if not isinstance(members, list):
                logger.warning(f"Group '{group_name}' should be a list of node IDs")
                continue
            for node_id in members:
                if node_id not in nodes:
                    logger.warning(f"Group '{group_name}' references unknown node: {node_id}")

    def get_groups(self) -> dict[str, list[str]]:
        return dict(self._config.get("groups", {}))

    def get_group_members(self, group_name: str) -> list[str]:
        """Get node IDs in a group.

        Raises:
            KeyError: If group doesn't exist
        """
        groups = self._config.get("groups", {})
        if group_name not in groups:
            raise KeyError(f"Unknown group: {group_name}")
        return list(groups[group_name])

    def resolve(self, target: str) -> list[str]:
        """Node IDs for a node name or a group name."""
        if target in self._config.get("nodes", {}):
            return [target]
        return self.get_group_members(target)
