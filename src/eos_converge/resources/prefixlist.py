"""IPv4 prefix-list rules.

Both running-config layouts are understood. Single-line::

    ip prefix-list PL-PEERS seq 10 permit 10.0.0.0/8 ge 16 le 24

and block form::

    ip prefix-list PL-PEERS
       seq 10 permit 10.0.0.0/8 ge 16 le 24
    !
"""
import re
from typing import Optional

from .block import extract_block, literal
from .commands import parse_int
from .schema import PrefixListRecord

NAME_RE = re.compile(r"^ip prefix-list (\S+)", re.M)
RULE_RE = re.compile(
    r"^seq (\S+) (permit|deny) ([^/\s]+)/(\S+?)"
    r"(?: eq (\S+))?(?: ge (\S+))?(?: le (\S+))?$"
)


def parse_rule(prefix_list: str, text: str) -> Optional[PrefixListRecord]:
    """Parse ``seq N ACTION P/M [eq N] [ge N] [le N]``; None for other lines."""
    match = RULE_RE.match(text.strip())
    if match is None:
        return None
    seqno, action, prefix, masklen, eq, ge, le = match.groups()
    number = parse_int(seqno, "prefix-list seqno")
    return PrefixListRecord.from_fields(
        name=f"{prefix_list}:{number}",
        prefix_list=prefix_list,
        seqno=number,
        action=action,
        prefix=prefix,
        masklen=parse_int(masklen, "prefix-list masklen"),
        eq=parse_int(eq, "prefix-list eq"),
        ge=parse_int(ge, "prefix-list ge"),
        le=parse_int(le, "prefix-list le"),
    )


def parse_prefix_list(config: str, prefix_list: str) -> list[PrefixListRecord]:
    """Rules of one prefix-list, in config order."""
    lines = re.findall(rf"^ip prefix-list {re.escape(prefix_list)} (seq .+)$", config, re.M)
    block = extract_block(config, literal(f"ip prefix-list {prefix_list}"))
    if block is not None:
        lines.extend(block.splitlines()[1:])

    rules = []
    for line in lines:
        rule = parse_rule(prefix_list, line)
        if rule is not None:
            rules.append(rule)
    return rules


def rule_line(rule: PrefixListRecord) -> str:
    line = (
        f"ip prefix-list {rule.prefix_list} seq {rule.seqno} "
        f"{rule.action} {rule.prefix}/{rule.masklen}"
    )
    for keyword in ("eq", "ge", "le"):
        value = getattr(rule, keyword)
        if value is not None:
            line += f" {keyword} {value}"
    return line


def add_commands(rule: PrefixListRecord) -> list[str]:
    return [rule_line(rule)]


def remove_commands(rule: PrefixListRecord) -> list[str]:
    """Negation restates the whole rule, masklen included."""
    return [f"no {rule_line(rule)}"]


class Prefixlist:
    """Prefix-lists configured on a node."""

    def __init__(self, node):
        self.node = node

    def get(self, name: str) -> list[PrefixListRecord]:
        return parse_prefix_list(self.node.running_config(), name)

    def getall(self) -> dict[str, PrefixListRecord]:
        """Every rule keyed by ``NAME:SEQNO``."""
        config = self.node.running_config()
        result = {}
        for name in dict.fromkeys(NAME_RE.findall(config)):
            for rule in parse_prefix_list(config, name):
                result[rule.name] = rule
        return result

    def add_rule(self, rule: PrefixListRecord) -> bool:
        return self.node.configure(add_commands(rule))

    def remove_rule(self, rule: PrefixListRecord) -> bool:
        return self.node.configure(remove_commands(rule))

    def delete(self, name: str) -> bool:
        return self.node.configure([f"no ip prefix-list {name}"])
