"""Transports for talking to EOS nodes."""
from .base import Transport, NodeConfig
from .eapi import EapiTransport
from .ssh import SshTransport

__all__ = [
    "Transport",
    "NodeConfig",
    "EapiTransport",
    "SshTransport",
    "TRANSPORT_TYPES",
    "create_transport",
]

# Transport type registry
TRANSPORT_TYPES = {
    "eapi": EapiTransport,
    "ssh": SshTransport,
}


def create_transport(node_id: str, config: dict) -> Transport:
    """Factory function to create transport instances."""
    transport_type = config.get("transport", "eapi").lower()
    if transport_type not in TRANSPORT_TYPES:
        raise ValueError(f"Unknown transport type: {transport_type}")

    transport_class = TRANSPORT_TYPES[transport_type]
    return transport_class(node_id, NodeConfig(**config))
