"""Prefix-list rule provider."""
from ..resources.prefixlist import Prefixlist, add_commands, remove_commands, rule_line
from ..resources.schema import PrefixListRecord
from .base import BatchedProvider, ChangeSet


class PrefixListProvider(BatchedProvider):
    resource_type = "eos_prefix_list"
    record_class = PrefixListRecord
    api_class = Prefixlist
    properties = ("action", "prefix", "masklen", "eq", "ge", "le")
    identity = ("prefix_list", "seqno")

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Prefixlist(node).getall().values())

    def flush(self, changes: ChangeSet) -> list[str]:
        state = self.desired_state(changes)
        self.validate_identity(state, self.identity)
        current = self.current

        if state.ensure == "absent":
            return remove_commands(current) if current is not None else []

        self.validate_identity(state, ("action", "prefix", "masklen"))
        if current is None:
            return add_commands(state)
        if rule_line(current) == rule_line(state):
            return []
        return remove_commands(current) + add_commands(state)
