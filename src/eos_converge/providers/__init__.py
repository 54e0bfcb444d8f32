"""Provider adapters, one per resource type."""
from .base import BatchedProvider, ChangeSet, ImmediateProvider, Provider
from .interface import InterfaceProvider, IpInterfaceProvider
from .mlag import MlagInterfaceProvider
from .ntp import NtpProvider
from .ospf import OspfInstanceProvider, OspfInterfaceProvider, OspfNetworkProvider
from .prefixlist import PrefixListProvider
from .routemap import RoutemapProvider
from .staticroute import StaticRouteProvider
from .stp import MstInstanceProvider, StpInterfaceProvider, StpProvider
from .switchport import SwitchportProvider
from .vlan import VlanProvider
from .vxlan import VxlanProvider

__all__ = [
    "Provider",
    "ImmediateProvider",
    "BatchedProvider",
    "ChangeSet",
    "PROVIDERS",
    "get_provider",
]

# Resource type registry, in the order resources are converged
PROVIDERS: dict[str, type[Provider]] = {
    provider.resource_type: provider
    for provider in (
        VlanProvider,
        InterfaceProvider,
        IpInterfaceProvider,
        SwitchportProvider,
        MlagInterfaceProvider,
        StpProvider,
        MstInstanceProvider,
        StpInterfaceProvider,
        NtpProvider,
        VxlanProvider,
        PrefixListProvider,
        StaticRouteProvider,
        RoutemapProvider,
        OspfInstanceProvider,
        OspfNetworkProvider,
        OspfInterfaceProvider,
    )
}


def get_provider(resource_type: str) -> type[Provider]:
    """Look up a provider class by resource type name."""
    if resource_type not in PROVIDERS:
        raise KeyError(f"Unknown resource type: {resource_type}")
    return PROVIDERS[resource_type]
