"""Reconciliation engine - converge nodes to a declarative manifest.

Usage:
    from eos_converge.engine import ManifestParser, Reconciler, summarize_run

    manifest = ManifestParser().parse({
        "node": "leaf1",
        "resources": {
            "eos_vlan": {"100": {"vlan_name": "servers"}},
        },
    })
    result = Reconciler(node).run(manifest)
    print(summarize_run(result))
"""

from .diff import attribute_changes, insync, summarize_run
from .engine import Reconciler
from .manifest import ManifestParser
from .schema import (
    AttributeChange,
    ChangeType,
    Manifest,
    ResourceChange,
    RunResult,
)

__all__ = [
    "Reconciler",
    "ManifestParser",
    "Manifest",
    "AttributeChange",
    "ChangeType",
    "ResourceChange",
    "RunResult",
    "attribute_changes",
    "insync",
    "summarize_run",
]
