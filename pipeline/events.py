"""
Discovery Event Data Model
Records produced by the enumeration engine and the per-ASN tallies built from them.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DiscoveryEvent:
    """One discovered hostname plus the network metadata the engine found."""
    name: str
    address: str = ''
    source: str = ''
    asn: int = 0
    isp: str = ''
    netblock: str = ''


@dataclass
class AsnData:
    """ISP name and netblock hit counts for a single ASN."""
    name: str
    netblocks: dict = field(default_factory=dict)
