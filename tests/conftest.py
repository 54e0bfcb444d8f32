"""Shared fixtures: in-memory transports standing in for an EOS node."""
import pytest

from eos_converge.errors import CommandError
from eos_converge.node import RUNNING_CONFIG, Node
from eos_converge.transport.base import NodeConfig, Transport


class FakeTransport(Transport):
    """Serves canned replies and records every command it receives.

    ``responses`` maps a command to its reply: a dict for JSON commands or
    a string for text commands.
    """

    def __init__(self, running_config: str = "", responses: dict = None, reject_config: bool = False):
        super().__init__("test-node", NodeConfig(host="192.0.2.1"))
        self.running_config = running_config
        self.responses = dict(responses or {})
        self.reject_config = reject_config
        self.enabled: list[tuple[list[str], str]] = []
        self.configured: list[list[str]] = []

    def enable(self, commands, format="json"):
        self.enabled.append((list(commands), format))
        replies = []
        for command in commands:
            if command == RUNNING_CONFIG:
                replies.append({"output": self.running_config})
            elif command in self.responses:
                reply = self.responses[command]
                replies.append({"output": reply} if isinstance(reply, str) else reply)
            else:
                raise CommandError(f"unexpected command {command!r}", command=command)
        return replies

    def config(self, commands):
        self.configured.append(list(commands))
        if self.reject_config:
            return [{"errors": ["% Invalid input"]} for _ in commands]
        return [{} for _ in commands]

    @property
    def sent(self) -> list[str]:
        """Every configuration command, flattened."""
        return [command for batch in self.configured for command in batch]


CONTEXT_PREFIXES = ("interface ", "router ospf ", "vlan ", "route-map ")
SINGLE_VALUED = (
    "switchport trunk allowed vlan",
    "switchport trunk native vlan",
    "switchport access vlan",
    "switchport mode",
    "lacp port-priority",
    "description",
    "speed",
    "ip address",
    "mtu",
    "router-id",
    "max-lsa",
    "maximum-paths",
)


class SimulatedTransport(FakeTransport):
    """A FakeTransport that applies block-level commands to its running config."""

    def config(self, commands):
        replies = super().config(commands)
        blocks = self._parse()
        children = None
        for command in commands:
            if command.startswith(CONTEXT_PREFIXES):
                children = blocks.setdefault(command, [])
                continue
            self._apply(children, command)
        self.running_config = self._render(blocks)
        return replies

    def _parse(self) -> dict[str, list[str]]:
        blocks: dict[str, list[str]] = {}
        header = None
        for line in self.running_config.splitlines():
            if line == "!":
                header = None
            elif line and not line.startswith(" "):
                header = line
                blocks[header] = []
            elif header is not None and line.strip():
                blocks[header].append(line.strip())
        return blocks

    @staticmethod
    def _render(blocks: dict[str, list[str]]) -> str:
        out = []
        for header, children in blocks.items():
            out.append(header)
            out.extend(f"   {child}" for child in children)
            out.append("!")
        return "\n".join(out) + "\n"

    @staticmethod
    def _remove(children: list[str], keyword: str) -> None:
        children[:] = [
            c for c in children
            if not (c == keyword or c.startswith(keyword + " ")
                    or c == f"no {keyword}" or c.startswith(f"no {keyword} "))
        ]

    @staticmethod
    def _passive(children: list[str], command: str) -> None:
        """Keep a per-interface line only when it departs from the default mode."""
        name = command.rsplit(" ", 1)[1]
        children[:] = [
            c for c in children
            if c not in (f"passive-interface {name}", f"no passive-interface {name}")
        ]
        if command.startswith("no ") == ("passive-interface default" in children):
            children.append(command)

    def _apply(self, children: list[str], command: str) -> None:
        if command.endswith("passive-interface default"):
            if command == "passive-interface default" and command not in children:
                children.append(command)
            elif command != "passive-interface default":
                self._remove(children, "passive-interface default")
        elif command.startswith(("passive-interface ", "no passive-interface ")):
            self._passive(children, command)
        elif command.startswith("default "):
            self._remove(children, command[len("default "):])
        elif command == "shutdown" or command == "no shutdown":
            self._remove(children, "shutdown")
            children.append(command)
        elif command.startswith("no "):
            self._remove(children, command[len("no "):])
        elif command.startswith("switchport trunk allowed vlan add "):
            vlans = command.rsplit(" ", 1)[1]
            for i, child in enumerate(children):
                if child.startswith("switchport trunk allowed vlan "):
                    existing = child.rsplit(" ", 1)[1]
                    merged = vlans if existing == "none" else f"{existing},{vlans}"
                    children[i] = f"switchport trunk allowed vlan {merged}"
                    return
            children.append(f"switchport trunk allowed vlan {vlans}")
        else:
            for keyword in SINGLE_VALUED:
                if command.startswith(keyword + " "):
                    self._remove(children, keyword)
                    break
            children.append(command)


@pytest.fixture
def make_node():
    """Factory building a Node on top of a FakeTransport."""
    def _make(running_config: str = "", responses: dict = None, **kwargs) -> Node:
        return Node("test-node", FakeTransport(running_config, responses, **kwargs))
    return _make


@pytest.fixture
def make_simulated_node():
    """Factory building a Node whose transport applies config commands."""
    def _make(running_config: str = "", responses: dict = None) -> Node:
        return Node("test-node", SimulatedTransport(running_config, responses))
    return _make
