"""Static route provider."""
from ..resources.schema import StaticRouteRecord
from ..resources.staticroute import Staticroute, add_commands, remove_commands, route_line
from .base import BatchedProvider, ChangeSet


class StaticRouteProvider(BatchedProvider):
    resource_type = "eos_static_route"
    record_class = StaticRouteRecord
    api_class = Staticroute
    properties = ("distance", "tag", "route_name")
    identity = ("prefix", "masklen", "nexthop")

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Staticroute(node).getall().values())

    def flush(self, changes: ChangeSet) -> list[str]:
        state = self.desired_state(changes)
        self.validate_identity(state, self.identity)
        current = self.current

        if state.ensure == "absent":
            return remove_commands(current) if current is not None else []
        if current is None:
            return add_commands(state)
        if route_line(current) == route_line(state):
            return []
        return remove_commands(current) + add_commands(state)
