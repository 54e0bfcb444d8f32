"""EOS CLI over SSH, for nodes without eAPI enabled.

Technical details:
- Interactive shell via invoke_shell(), prompts end in ``>`` or ``#``
- ``terminal length 0`` disables paging
- Structured output comes from piping show commands through ``| json``
- Rejected commands print a line starting with ``%``
"""
import json
import logging
import re
import time
from typing import Optional

import paramiko

from ..errors import CommandError, ConnectionFailed, EosError
from ..utils.connection import with_retry
from ..utils.logging_config import timed
from .base import NodeConfig, Transport

logger = logging.getLogger(__name__)

PROMPT_PATTERN = re.compile(r"^[\w.\-()]+[>#]\s*$", re.M)
PASSWORD_PATTERN = re.compile(r"[Pp]assword:\s*$")
ANSI_PATTERN = re.compile(r"\x1b\[[0-9;?]*[a-zA-Z]")

# Error lines printed by the EOS CLI (always at line start)
ERROR_PATTERNS = [
    r"^% Invalid input",
    r"^% Incomplete command",
    r"^% Ambiguous command",
    r"^% Unavailable command",
    r"^% Error",
    r"^% .*not supported",
]


def has_error(output: str) -> Optional[str]:
    """Return the first error line in ``output``, or None."""
    for line in output.splitlines():
        line = line.strip()
        for pattern in ERROR_PATTERNS:
            if re.match(pattern, line):
                return line
    return None


def clean_output(output: str, command: str) -> str:
    """Strip ANSI codes, the echoed command and the trailing prompt."""
    output = ANSI_PATTERN.sub("", output).replace("\r", "")
    lines = output.split("\n")
    if lines and command in lines[0]:
        lines = lines[1:]
    if lines and PROMPT_PATTERN.search(lines[-1]):
        lines = lines[:-1]
    return "\n".join(lines).strip("\n")


class SshTransport(Transport):
    """Send commands to a node through an interactive CLI session."""

    def __init__(self, node_id: str, config: NodeConfig):
        super().__init__(node_id, config)
        self._client: Optional[paramiko.SSHClient] = None
        self._shell: Optional[paramiko.Channel] = None

    @property
    def is_connected(self) -> bool:
        return self._shell is not None

    @with_retry()
    @timed("ssh_connect")
    def connect(self) -> None:
        """Open the SSH session and enter privileged mode."""
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            client.connect(
                self.node_config.host,
                port=self.node_config.get_port(),
                username=self.node_config.username,
                password=self.node_config.get_password(),
                timeout=self.node_config.timeout,
                allow_agent=False,
                look_for_keys=False,
            )
        except (paramiko.SSHException, OSError) as e:
            client.close()
            raise ConnectionFailed(f"{self.node_id}: SSH connection failed: {e}") from e

        self._client = client
        try:
            self._shell = client.invoke_shell()
            self._shell.settimeout(self.node_config.timeout)
            self._read_until_prompt()

            self.send_command("terminal length 0")
            self._enter_enable()
        except (paramiko.SSHException, OSError) as e:
            self.close()
            raise ConnectionFailed(f"{self.node_id}: SSH session setup failed: {e}") from e
        except EosError:
            self.close()
            raise
        logger.info(f"Connected to {self.node_id} via SSH")

    def _enter_enable(self) -> None:
        self._send_raw("enable\n")
        output = self._read_until(re.compile(f"{PROMPT_PATTERN.pattern}|{PASSWORD_PATTERN.pattern}", re.M))
        if PASSWORD_PATTERN.search(output):
            self._send_raw(f"{self.node_config.enable_password or ''}\n")
            self._read_until_prompt()

    def close(self) -> None:
        if self._shell is not None:
            self._shell.close()
            self._shell = None
        if self._client is not None:
            self._client.close()
            self._client = None

    def _send_raw(self, data: str) -> None:
        if self._shell is None:
            raise ConnectionFailed(f"{self.node_id}: not connected")
        self._shell.send(data)

    def _read_until(self, pattern: re.Pattern) -> str:
        output = ""
        deadline = time.monotonic() + self.node_config.timeout
        while time.monotonic() < deadline:
            if self._shell.recv_ready():
                output += self._shell.recv(65535).decode("utf-8", errors="ignore")
                if pattern.search(ANSI_PATTERN.sub("", output).replace("\r", "")):
                    return output
            else:
                time.sleep(0.05)
        raise ConnectionFailed(f"{self.node_id}: timed out waiting for prompt")

    def _read_until_prompt(self) -> str:
        return self._read_until(PROMPT_PATTERN)

    def send_command(self, command: str) -> str:
        """Send one command line and return its output."""
        if not self.is_connected:
            self.connect()
        self._send_raw(f"{command}\n")
        return clean_output(self._read_until_prompt(), command)

    @timed("ssh_enable")
    def enable(self, commands: list[str], format: str = "json") -> list[dict]:
        replies = []
        for command in commands:
            if format == "json":
                output = self.send_command(f"{command} | json")
            else:
                output = self.send_command(command)

            error = has_error(output)
            if error:
                raise CommandError(f"{self.node_id}: {error}", command=command)

            if format == "json":
                try:
                    replies.append(json.loads(output))
                except ValueError as e:
                    raise CommandError(
                        f"{self.node_id}: unparseable JSON output", command=command
                    ) from e
            else:
                replies.append({"output": output})
        return replies

    @timed("ssh_config")
    def config(self, commands: list[str]) -> list[dict]:
        self.send_command("configure")
        replies = []
        try:
            for command in commands:
                output = self.send_command(command)
                error = has_error(output)
                if error:
                    raise CommandError(f"{self.node_id}: {error}", command=command)
                replies.append({})
        finally:
            self.send_command("end")
        return replies
