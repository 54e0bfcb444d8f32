"""Global NTP settings: the interface NTP packets are sourced from."""
import re
from typing import Optional

from .commands import attribute_commands
from .schema import NtpRecord

SOURCE_RE = re.compile(r"^ntp source (\S+)$", re.M)

GLOBAL_NAME = "settings"


def parse_ntp(config: str) -> NtpRecord:
    match = SOURCE_RE.search(config)
    return NtpRecord.from_fields(name=GLOBAL_NAME, source_interface=match.group(1) if match else "")


def source_interface_commands(value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(None, "ntp source", value, default)


class Ntp:
    """NTP configuration of a node."""

    def __init__(self, node):
        self.node = node

    def get(self) -> NtpRecord:
        return parse_ntp(self.node.running_config())

    def set_source_interface(self, value: Optional[str] = None, default: bool = False) -> bool:
        return self.node.configure(source_interface_commands(value, default))
