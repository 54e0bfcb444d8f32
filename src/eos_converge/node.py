"""A managed node: transport plus a read-only running-config snapshot."""
import logging
from typing import Optional, Union

from .resources.block import extract_block, literal
from .transport.base import Transport
from .utils.logging_config import timed

logger = logging.getLogger(__name__)

RUNNING_CONFIG = "show running-config all"

Commands = Union[str, list[str]]


def _as_list(commands: Commands) -> list[str]:
    if isinstance(commands, str):
        return [commands]
    return list(commands)


def replies_ok(commands: list[str], replies: list) -> bool:
    """True when there is one reply per command and none carries an error."""
    if len(replies) != len(commands):
        return False
    for reply in replies:
        if not isinstance(reply, dict):
            return False
        if reply.get("errors"):
            return False
    return True


class Node:
    """Wraps a transport with config-snapshot caching and command history.

    The running config is fetched once and reused by every parser until a
    configuration command is sent, which invalidates it.

    With ``dry_run`` enabled, show commands still reach the node but
    configuration commands are only recorded.
    """

    def __init__(self, node_id: str, transport: Transport, dry_run: bool = False):
        self.node_id = node_id
        self.transport = transport
        self.dry_run = dry_run
        self.history: list[list[str]] = []
        self._running_config: Optional[str] = None

    @timed("enable")
    def enable(self, commands: Commands, format: str = "json") -> list[dict]:
        """Run show commands, returning one reply per command."""
        commands = _as_list(commands)
        logger.debug(f"[{self.node_id}] enable ({format}): {commands}")
        return self.transport.enable(commands, format=format)

    @timed("config")
    def config(self, commands: Commands) -> list[dict]:
        """Send configuration commands as one batch."""
        commands = _as_list(commands)
        self.history.append(commands)
        self._running_config = None

        if self.dry_run:
            logger.info(f"[{self.node_id}] [DRY-RUN] would send: {commands}")
            return [{} for _ in commands]

        logger.info(f"[{self.node_id}] config: {commands}")
        return self.transport.config(commands)

    def configure(self, commands: Commands) -> bool:
        """Send configuration commands and report whether every one succeeded."""
        commands = _as_list(commands)
        replies = self.config(commands)
        ok = replies_ok(commands, replies)
        if not ok:
            logger.warning(f"[{self.node_id}] unexpected replies for {commands}: {replies}")
        return ok

    def running_config(self) -> str:
        """Cached ``show running-config all`` text."""
        if self._running_config is None:
            reply = self.enable([RUNNING_CONFIG], format="text")
            self._running_config = reply[-1]["output"]
        return self._running_config

    def refresh(self) -> None:
        """Drop the cached running config."""
        self._running_config = None

    def get_block(self, header: str) -> Optional[str]:
        """Block of the running config opened by the literal ``header`` line."""
        return extract_block(self.running_config(), literal(header))

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "Node":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        mode = " dry-run" if self.dry_run else ""
        return f"Node({self.node_id}{mode})"
