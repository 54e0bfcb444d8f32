#!/usr/bin/env python3
"""eos-converge command line.

Usage:
    eos-converge apply MANIFEST [--inventory PATH] [--dry-run]
    eos-converge show NODE [--type TYPE ...] [--inventory PATH]
    eos-converge history [--node NODE] [--limit N]

Environment variables:
    EOS_PASSWORD              Node credentials (default password_env)
    EOS_CONVERGE_INVENTORY    Inventory file location
    EOS_CONVERGE_LOG_LEVEL    Console log level
"""
import argparse
import logging
import sys
from typing import Optional

import yaml

from .config.inventory import NodeInventory
from .engine import ManifestParser, Reconciler, summarize_run
from .errors import EosError
from .providers import PROVIDERS
from .utils.audit_log import ChangeTracker, get_recent_changes, setup_audit_logging
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eos-converge",
        description="Converge EOS nodes to a declarative manifest",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    apply_cmd = sub.add_parser("apply", help="Apply a manifest to its node")
    apply_cmd.add_argument("manifest", help="Manifest YAML file")
    apply_cmd.add_argument("--inventory", help="Inventory file (default: search path)")
    apply_cmd.add_argument("--dry-run", action="store_true", help="Show commands without sending them")
    apply_cmd.add_argument("--audit-dir", help="Audit log directory (default: ~/.eos-converge)")

    show_cmd = sub.add_parser("show", help="Print current state of a node as YAML")
    show_cmd.add_argument("node", help="Node ID from the inventory")
    show_cmd.add_argument(
        "--type",
        dest="types",
        action="append",
        choices=sorted(PROVIDERS),
        help="Resource type to include (repeatable, default: all)",
    )
    show_cmd.add_argument("--inventory", help="Inventory file (default: search path)")

    history_cmd = sub.add_parser("history", help="Show recent changes from the audit log")
    history_cmd.add_argument("--node", help="Only changes for this node")
    history_cmd.add_argument("--limit", type=int, default=20, help="Number of entries (default: 20)")
    history_cmd.add_argument("--log-file", help="Audit log file (default: ~/.eos-converge/audit.log)")

    return parser


def cmd_apply(args) -> int:
    manifest = ManifestParser().parse_file(args.manifest)
    inventory = NodeInventory(args.inventory)
    dry_run = args.dry_run or manifest.dry_run

    setup_audit_logging(args.audit_dir)
    with inventory.get_node(manifest.node_id, dry_run=dry_run) as node:
        result = Reconciler(node, tracker=ChangeTracker(node.node_id)).run(manifest)

    print(summarize_run(result))
    if dry_run and result.commands:
        print("\nCommands:")
        for command in result.commands:
            print(f"  {command}")
    return 0 if result.success else 1


def cmd_show(args) -> int:
    inventory = NodeInventory(args.inventory)
    with inventory.get_node(args.node) as node:
        state = Reconciler(node).snapshot(args.types)
    print(yaml.safe_dump(state, sort_keys=False, default_flow_style=False))
    return 0


def cmd_history(args) -> int:
    records = get_recent_changes(log_file=args.log_file, node_id=args.node, limit=args.limit)
    if not records:
        print("No changes recorded")
        return 0
    for record in records:
        status = "OK" if record.success else f"FAILED: {record.error}"
        mode = " [dry-run]" if record.dry_run else ""
        print(f"{record.timestamp} {record.node_id} {record.operation} "
              f"{record.parameters.get('name', '')}{mode} {status}")
        for command in record.commands:
            print(f"    {command}")
    return 0


COMMANDS = {
    "apply": cmd_apply,
    "show": cmd_show,
    "history": cmd_history,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else None)

    try:
        return COMMANDS[args.command](args)
    except (EosError, FileNotFoundError, KeyError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
