"""Parameter models for the interface, route and global definitions"""

from ipaddress import IPv4Address, IPv6Address, IPv6Interface
from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    IPvAnyAddress,
    StrictBool,
    model_validator,
)

Ensure = Literal["up", "down"]

# ifcfg files are sourced by the shell: unquoted values are single tokens,
# quoted values may not close the quotes or expand anything
TOKEN_PATTERN = r"^[A-Za-z0-9_.:@-]*$"
Token = Annotated[str, Field(pattern=TOKEN_PATTERN)]
QuotedValue = Annotated[str, Field(pattern=r'^[^"\\$`\x00-\x1f\x7f]*$')]

OptionalIPv4 = IPv4Address | Literal[""]
IPv6Value = IPv6Address | IPv6Interface
MacAddress = Annotated[str, Field(pattern=r"^(([0-9A-Fa-f]{2}:){5}[0-9A-Fa-f]{2})?$")]

Mtu = Annotated[int, Field(strict=True, gt=0)]
LinkDelay = Annotated[int, Field(strict=True, ge=0)]


class StrictParams(BaseModel):
    """Unknown parameters are rejected, booleans must be real booleans"""

    model_config = ConfigDict(extra="forbid")


class InterfaceParams(StrictParams):
    """Full interface specification rendered into an ifcfg file"""

    ensure: Ensure
    ipaddress: OptionalIPv4 = Field(description="IPv4 address, empty for dynamic interfaces")
    netmask: OptionalIPv4 = Field(description="IPv4 netmask, empty for dynamic interfaces")
    macaddress: MacAddress = Field(description="Hardware address, empty to leave HWADDR out")
    gateway: IPv4Address | None = None
    ipv6address: IPv6Value | None = None
    ipv6gateway: IPv6Address | None = None
    ipv6init: StrictBool = False
    ipv6autoconf: StrictBool = False
    ipv6peerdns: StrictBool = False
    bootproto: Literal["none", "dhcp", "bootp"] = "none"
    userctl: StrictBool = False
    mtu: Mtu | None = None
    dhcp_hostname: Token | None = None
    ethtool_opts: QuotedValue | None = None
    bonding_opts: QuotedValue | None = None
    isalias: StrictBool = False
    peerdns: StrictBool = False
    dns1: IPvAnyAddress | None = None
    dns2: IPvAnyAddress | None = None
    domain: QuotedValue | None = None
    bridge: Token | None = None
    linkdelay: LinkDelay | None = None
    master: Token | None = Field(None, description="Bond master for a bond slave")
    noaliasrouting: StrictBool = False


class StaticInterfaceParams(StrictParams):
    """network::if::static"""

    ensure: Ensure
    ipaddress: IPv4Address
    netmask: IPv4Address
    macaddress: MacAddress
    gateway: IPv4Address | None = None
    ipv6address: IPv6Value | None = None
    ipv6gateway: IPv6Address | None = None
    ipv6init: StrictBool = False
    ipv6autoconf: StrictBool = False
    ipv6peerdns: StrictBool = False
    userctl: StrictBool = False
    mtu: Mtu | None = None
    ethtool_opts: QuotedValue | None = None
    peerdns: StrictBool = False
    dns1: IPvAnyAddress | None = None
    dns2: IPvAnyAddress | None = None
    domain: QuotedValue | None = None
    bridge: Token | None = None
    linkdelay: LinkDelay | None = None


class DynamicInterfaceParams(StrictParams):
    """network::if::dynamic"""

    ensure: Ensure
    macaddress: MacAddress
    bootproto: Literal["dhcp", "bootp"] = "dhcp"
    userctl: StrictBool = False
    mtu: Mtu | None = None
    dhcp_hostname: Token | None = None
    ethtool_opts: QuotedValue | None = None
    peerdns: StrictBool = False
    bridge: Token | None = None
    linkdelay: LinkDelay | None = None


class AliasParams(StrictParams):
    """network::if::alias"""

    ensure: Ensure
    ipaddress: IPv4Address
    netmask: IPv4Address
    gateway: IPv4Address | None = None
    noaliasrouting: StrictBool = False
    userctl: StrictBool = False


class BondStaticParams(StrictParams):
    """network::bond::static"""

    ensure: Ensure
    ipaddress: IPv4Address
    netmask: IPv4Address
    gateway: IPv4Address | None = None
    mtu: Mtu | None = None
    ethtool_opts: QuotedValue | None = None
    bonding_opts: QuotedValue = "miimon=100"
    peerdns: StrictBool = False
    ipv6init: StrictBool = False
    ipv6address: IPv6Value | None = None
    ipv6gateway: IPv6Address | None = None
    ipv6peerdns: StrictBool = False
    dns1: IPvAnyAddress | None = None
    dns2: IPvAnyAddress | None = None
    domain: QuotedValue | None = None
    bridge: Token | None = None
    userctl: StrictBool = False


class BondDynamicParams(StrictParams):
    """network::bond::dynamic"""

    ensure: Ensure
    bootproto: Literal["dhcp", "bootp"] = "dhcp"
    mtu: Mtu | None = None
    ethtool_opts: QuotedValue | None = None
    bonding_opts: QuotedValue = "miimon=100"
    dhcp_hostname: Token | None = None
    peerdns: StrictBool = False
    userctl: StrictBool = False


class BondSlaveParams(StrictParams):
    """network::bond::slave"""

    macaddress: MacAddress
    master: Token = Field(min_length=1)
    ethtool_opts: QuotedValue | None = None
    mtu: Mtu | None = None


class BondAliasParams(StrictParams):
    """network::bond::alias"""

    ensure: Ensure
    ipaddress: IPv4Address
    netmask: IPv4Address
    gateway: IPv4Address | None = None
    userctl: StrictBool = False


class RouteParams(StrictParams):
    """network::route, one static route per list position"""

    ipaddress: list[IPv4Address] = Field(min_length=1)
    netmask: list[IPv4Address] = Field(min_length=1)
    gateway: list[IPv4Address] = Field(min_length=1)

    @model_validator(mode="after")
    def _same_lengths(self) -> "RouteParams":
        if not len(self.ipaddress) == len(self.netmask) == len(self.gateway):
            raise ValueError("ipaddress, netmask and gateway must have the same number of entries")
        return self


class GlobalParams(StrictParams):
    """network::global, rendered into /etc/sysconfig/network"""

    hostname: Token | None = None
    gateway: IPv4Address | None = None
    gatewaydev: Token | None = None
    nisdomain: Token | None = None
    ipv6networking: StrictBool = False
    ipv6gateway: IPv6Address | None = None
    ipv6defaultdev: Token | None = None
    vlan: StrictBool = False
    nozeroconf: StrictBool = False
