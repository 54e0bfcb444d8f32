"""Tests for the command line entry point."""
import pytest

from eos_converge import cli
from eos_converge.utils.audit_log import audit_logger

RUNNING_CONFIG = """interface Ethernet1
   description old
   no shutdown
!
"""

MANIFEST = """node: leaf1
resources:
  eos_interface:
    Ethernet1:
      description: uplink
"""


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    monkeypatch.setenv("EOS_CONVERGE_LOG_FILE", str(tmp_path / "logs" / "eos-converge.log"))
    yield
    for handler in list(audit_logger.handlers):
        handler.close()
        audit_logger.removeHandler(handler)
    audit_logger.propagate = True


@pytest.fixture
def inventory(monkeypatch, make_node):
    """Replace the inventory with one serving a fake node."""
    nodes = []

    class FakeInventory:
        def __init__(self, config_path=None):
            pass

        def get_node(self, node_id, dry_run=False):
            node = make_node(RUNNING_CONFIG)
            node.node_id = node_id
            node.dry_run = dry_run
            nodes.append(node)
            return node

    monkeypatch.setattr(cli, "NodeInventory", FakeInventory)
    return nodes


class TestCli:
    """Tests for apply, show and history."""

    def test_apply_dry_run_then_history(self, tmp_path, inventory, capsys):
        manifest = tmp_path / "leaf1.yaml"
        manifest.write_text(MANIFEST)
        audit_dir = tmp_path / "audit"

        rc = cli.main(["apply", str(manifest), "--dry-run", "--audit-dir", str(audit_dir)])
        out = capsys.readouterr().out
        assert rc == 0
        assert "[~] eos_interface Ethernet1" in out
        assert "description uplink" in out
        assert inventory[0].transport.configured == []

        rc = cli.main(["history", "--log-file", str(audit_dir / "audit.log")])
        out = capsys.readouterr().out
        assert rc == 0
        assert "leaf1 modify eos_interface Ethernet1 [dry-run] OK" in out
        assert "description uplink" in out

    def test_apply_sends_commands(self, tmp_path, inventory, capsys):
        manifest = tmp_path / "leaf1.yaml"
        manifest.write_text(MANIFEST)
        rc = cli.main(["apply", str(manifest), "--audit-dir", str(tmp_path / "audit")])
        assert rc == 0
        assert inventory[0].transport.sent == ["interface Ethernet1", "description uplink"]

    def test_apply_bad_manifest(self, tmp_path, inventory):
        manifest = tmp_path / "bad.yaml"
        manifest.write_text("resources: {}\n")
        assert cli.main(["apply", str(manifest)]) == 1

    def test_apply_missing_manifest(self, tmp_path):
        assert cli.main(["apply", str(tmp_path / "missing.yaml")]) == 1

    def test_show(self, inventory, capsys):
        rc = cli.main(["show", "leaf1", "--type", "eos_interface"])
        out = capsys.readouterr().out
        assert rc == 0
        assert "eos_interface:" in out
        assert "description: old" in out

    def test_history_empty(self, tmp_path, capsys):
        rc = cli.main(["history", "--log-file", str(tmp_path / "none.log")])
        assert rc == 0
        assert "No changes recorded" in capsys.readouterr().out

    def test_unknown_type_rejected(self):
        with pytest.raises(SystemExit):
            cli.main(["show", "leaf1", "--type", "eos_bgp"])
