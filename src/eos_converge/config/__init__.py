"""Node inventory configuration."""
from .inventory import NodeInventory

__all__ = ["NodeInventory"]
