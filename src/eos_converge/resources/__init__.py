"""Parsers and command builders for each EOS configuration family."""
from .block import Span, find_block, extract_block
from .interface import Interface
from .ipinterface import IpInterface
from .mlag import Mlag
from .ntp import Ntp
from .ospf import Ospf
from .prefixlist import Prefixlist
from .routemap import Routemap
from .staticroute import Staticroute
from .stp import Stp
from .switchport import Switchport
from .vlan import Vlan
from .vxlan import Vxlan

__all__ = [
    "Span",
    "find_block",
    "extract_block",
    "Interface",
    "IpInterface",
    "Mlag",
    "Ntp",
    "Ospf",
    "Prefixlist",
    "Routemap",
    "Staticroute",
    "Stp",
    "Switchport",
    "Vlan",
    "Vxlan",
]
