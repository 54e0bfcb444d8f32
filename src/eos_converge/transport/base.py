"""Base transport abstraction for EOS nodes."""
import os
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {
    "https": 443,
    "http": 80,
    "ssh": 22,
}


@dataclass
class NodeConfig:
    """Connection settings for one node."""
    host: str
    transport: str = "eapi"
    protocol: str = "https"
    port: Optional[int] = None
    username: str = "admin"
    password: Optional[str] = None
    password_env: str = "EOS_PASSWORD"
    enable_password: Optional[str] = None
    timeout: int = 30
    retries: int = 3
    verify_ssl: bool = True
    name: str = ""

    def get_password(self) -> str:
        """Get password from config or environment variable."""
        if self.password:
            return self.password
        return os.environ.get(self.password_env, "")

    def get_port(self) -> int:
        """Explicit port, or the default for the configured protocol."""
        if self.port:
            return self.port
        if self.transport == "ssh":
            return DEFAULT_PORTS["ssh"]
        return DEFAULT_PORTS.get(self.protocol, 443)


class Transport(ABC):
    """Request/response channel to a node.

    ``enable`` and ``config`` both return one reply mapping per command.
    Text-format replies carry the raw text under ``"output"``.
    """

    def __init__(self, node_id: str, config: NodeConfig):
        self.node_id = node_id
        self.node_config = config

    @abstractmethod
    def enable(self, commands: list[str], format: str = "json") -> list[dict]:
        """Run privileged show commands."""
        pass

    @abstractmethod
    def config(self, commands: list[str]) -> list[dict]:
        """Run commands in configuration mode."""
        pass

    def close(self) -> None:
        """Release any connection held by the transport."""
        pass

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
