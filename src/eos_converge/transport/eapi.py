"""EOS management API (eAPI) transport.

eAPI is JSON-RPC 2.0 over HTTP(S): a single ``runCmds`` request carries a
list of commands and the reply holds one result per command, in order.
Each request is its own CLI session, so privileged and configuration mode
have to be entered at the start of every batch.
"""
import itertools
import logging
from typing import Optional

import httpx

from ..errors import CommandError, ConnectionFailed
from ..utils.connection import with_retry
from ..utils.logging_config import timed
from .base import NodeConfig, Transport

logger = logging.getLogger(__name__)

ENDPOINT = "/command-api"


class EapiTransport(Transport):
    """Send commands to a node through eAPI."""

    def __init__(self, node_id: str, config: NodeConfig, client: Optional[httpx.Client] = None):
        super().__init__(node_id, config)
        self._client = client
        self._ids = itertools.count(1)

    @property
    def url(self) -> str:
        return f"{self.node_config.protocol}://{self.node_config.host}:{self.node_config.get_port()}{ENDPOINT}"

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                auth=(self.node_config.username, self.node_config.get_password()),
                timeout=httpx.Timeout(self.node_config.timeout),
                verify=self.node_config.verify_ssl,
            )
        return self._client

    def _enable_command(self):
        if self.node_config.enable_password:
            return {"cmd": "enable", "input": self.node_config.enable_password}
        return "enable"

    def request(self, commands: list, format: str = "json") -> list[dict]:
        """Run one ``runCmds`` call and return its result list."""
        payload = {
            "jsonrpc": "2.0",
            "method": "runCmds",
            "params": {"version": 1, "cmds": commands, "format": format},
            "id": f"{self.node_id}-{next(self._ids)}",
        }

        try:
            resp = self.client.post(self.url, json=payload)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ConnectionFailed(
                f"{self.node_id}: HTTP {e.response.status_code} from {self.url}"
            ) from e
        except httpx.HTTPError as e:
            raise ConnectionFailed(f"{self.node_id}: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise ConnectionFailed(f"{self.node_id}: invalid JSON reply from {self.url}") from e

        if "error" in body:
            raise self._command_error(commands, body["error"])
        return body.get("result", [])

    def _command_error(self, commands: list, error: dict) -> CommandError:
        """Map a JSON-RPC error to the first command that failed."""
        data = error.get("data") or []
        failed = None
        for command, reply in zip(commands, data):
            if isinstance(reply, dict) and reply.get("errors"):
                failed = command if isinstance(command, str) else command.get("cmd")
                break
        message = f"{self.node_id}: {error.get('message', 'command failed')}"
        return CommandError(message, command=failed, code=error.get("code"), output=data)

    @with_retry(exceptions=(ConnectionFailed,))
    @timed("eapi_enable")
    def enable(self, commands: list[str], format: str = "json") -> list[dict]:
        result = self.request([self._enable_command(), *commands], format=format)
        return result[1:]

    @timed("eapi_config")
    def config(self, commands: list[str]) -> list[dict]:
        result = self.request([self._enable_command(), "configure", *commands])
        return result[2:]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
