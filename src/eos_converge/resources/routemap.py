"""Route-map clauses.

A clause is identified by map name and sequence number; its action comes
from the header line::

    route-map RM-IN permit 10
       description peers
       match ip address prefix-list PL-PEERS
       set local-preference 200
    !
"""
import re
from typing import Optional

from .block import extract_block, literal
from .commands import attribute_commands, parse_int
from .schema import RoutemapRecord

HEADER_RE = re.compile(r"^route-map (\S+) (permit|deny) (\S+)$", re.M)
DESCRIPTION_RE = re.compile(r"^\s+description (.+)$", re.M)
MATCH_RE = re.compile(r"^\s+match (.+)$", re.M)
SET_RE = re.compile(r"^\s+set (.+)$", re.M)
CONTINUE_RE = re.compile(r"^\s+continue (\S+)$", re.M)


def clause_header(name: str, action: str, seqno: int) -> str:
    return f"route-map {name} {action} {seqno}"


def parse_clause(name: str, action: str, seqno: str, block: str) -> RoutemapRecord:
    number = parse_int(seqno, "route-map seqno")
    match = DESCRIPTION_RE.search(block)
    description = match.group(1) if match else None
    match = CONTINUE_RE.search(block)
    continue_seqno = parse_int(match.group(1), "route-map continue") if match else None
    return RoutemapRecord.from_fields(
        name=f"{name}:{number}",
        route_map=name,
        seqno=number,
        action=action,
        description=description,
        match=MATCH_RE.findall(block),
        set=SET_RE.findall(block),
        continue_seqno=continue_seqno,
    )


def parse_routemaps(config: str) -> dict[str, dict[int, RoutemapRecord]]:
    """All clauses, grouped by map name then sequence number."""
    result: dict[str, dict[int, RoutemapRecord]] = {}
    for name, action, seqno in HEADER_RE.findall(config):
        block = extract_block(config, literal(clause_header(name, action, seqno)))
        if block is None:
            continue
        record = parse_clause(name, action, seqno, block)
        result.setdefault(name, {})[record.seqno] = record
    return result


def create_commands(name: str, action: str, seqno: int) -> list[str]:
    return [clause_header(name, action, seqno)]


def delete_commands(name: str, action: str, seqno: int) -> list[str]:
    return [f"no {clause_header(name, action, seqno)}"]


def rules_commands(keyword: str, values: Optional[list[str]], current: Optional[list[str]]) -> list[str]:
    """Body lines replacing every ``match`` (or ``set``) rule of a clause."""
    commands = [f"no {keyword} {rule}" for rule in current or []]
    commands.extend(f"{keyword} {rule}" for rule in values or [])
    return commands


def description_commands(value: Optional[str] = None, default: bool = False) -> list[str]:
    return attribute_commands(None, "description", value, default)


def continue_commands(value: Optional[int] = None, default: bool = False) -> list[str]:
    return attribute_commands(None, "continue", value, default)


class Routemap:
    """Route-maps configured on a node."""

    def __init__(self, node):
        self.node = node

    def getall(self) -> dict[str, dict[int, RoutemapRecord]]:
        return parse_routemaps(self.node.running_config())

    def get(self, name: str) -> dict[int, RoutemapRecord]:
        """Clauses of one route-map keyed by seqno; empty when not configured."""
        return self.getall().get(name, {})

    def create(self, name: str, action: str, seqno: int) -> bool:
        return self.node.configure(create_commands(name, action, seqno))

    def delete(self, name: str, action: str, seqno: int) -> bool:
        return self.node.configure(delete_commands(name, action, seqno))

    def set_match_rules(self, name: str, action: str, seqno: int, values: list[str], current: list[str]) -> bool:
        commands = create_commands(name, action, seqno) + rules_commands("match", values, current)
        return self.node.configure(commands)

    def set_set_rules(self, name: str, action: str, seqno: int, values: list[str], current: list[str]) -> bool:
        commands = create_commands(name, action, seqno) + rules_commands("set", values, current)
        return self.node.configure(commands)
