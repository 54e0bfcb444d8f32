"""Route-map clause provider."""
from typing import Optional

from ..resources.routemap import (
    Routemap,
    continue_commands,
    create_commands,
    delete_commands,
    description_commands,
    rules_commands,
)
from ..resources.schema import RoutemapRecord
from .base import BatchedProvider, ChangeSet


def body_commands(
    state: RoutemapRecord,
    current: Optional[RoutemapRecord] = None,
    changed: Optional[set[str]] = None,
) -> list[str]:
    """Clause body lines; everything when ``current`` is None, else only ``changed``."""
    commands = []
    if current is None:
        if state.description:
            commands += description_commands(state.description)
        commands += rules_commands("match", state.match, None)
        commands += rules_commands("set", state.set, None)
        if state.continue_seqno is not None:
            commands += continue_commands(state.continue_seqno)
        return commands

    changed = changed or set()
    if "description" in changed:
        commands += description_commands(state.description)
    if "match" in changed:
        commands += rules_commands("match", state.match, current.match)
    if "set" in changed:
        commands += rules_commands("set", state.set, current.set)
    if "continue_seqno" in changed:
        commands += continue_commands(state.continue_seqno)
    return commands


class RoutemapProvider(BatchedProvider):
    resource_type = "eos_route_map"
    record_class = RoutemapRecord
    api_class = Routemap
    properties = ("action", "description", "match", "set", "continue_seqno")
    identity = ("route_map", "seqno")

    @classmethod
    def instances(cls, node):
        records = []
        for clauses in Routemap(node).getall().values():
            records.extend(clauses.values())
        return cls.wrap(node, records)

    def flush(self, changes: ChangeSet) -> list[str]:
        state = self.desired_state(changes)
        self.validate_identity(state, self.identity)
        current = self.current

        if state.ensure == "absent":
            if current is None:
                return []
            return delete_commands(current.route_map, current.action, current.seqno)

        self.validate_identity(state, ("action",))
        header = create_commands(state.route_map, state.action, state.seqno)

        if current is None:
            return header + body_commands(state)
        if current.action != state.action:
            return (
                delete_commands(current.route_map, current.action, current.seqno)
                + header
                + body_commands(state)
            )

        body = body_commands(state, current, set(changes.values))
        return header + body if body else []
