"""MLAG interface provider."""
from ..resources.mlag import Mlag, mlag_id_commands
from ..resources.schema import MlagInterfaceRecord
from .base import BatchedProvider, ChangeSet


class MlagInterfaceProvider(BatchedProvider):
    resource_type = "eos_mlag_interface"
    record_class = MlagInterfaceRecord
    api_class = Mlag
    properties = ("mlag_id",)

    @classmethod
    def instances(cls, node):
        return cls.wrap(node, Mlag(node).interfaces().values())

    def flush(self, changes: ChangeSet) -> list[str]:
        state = self.desired_state(changes)

        if state.ensure == "absent":
            return mlag_id_commands(self.name) if self.current is not None else []

        self.validate_identity(state, ("mlag_id",))
        if self.current is not None and self.current.mlag_id == state.mlag_id:
            return []
        return mlag_id_commands(self.name, state.mlag_id)
