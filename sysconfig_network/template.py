"""network-scripts file templating logic"""

from typing import Any

from jinja2 import Environment, StrictUndefined

from sysconfig_network.params import GlobalParams, InterfaceParams, RouteParams

HEADER = """\
###
### File managed by sysconfig-network
###
"""


def yesno(value: Any) -> str:
    """Render a truthy value as the yes/no used by initscripts"""
    return "yes" if value else "no"


ENV = Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
    autoescape=False,
)
ENV.filters["yesno"] = yesno


IFCFG_TEMPLATE = ENV.from_string(
    HEADER
    + """\
DEVICE={{ interface }}
BOOTPROTO={{ p.bootproto }}
{% if isalias %}
ONPARENT={{ onparent }}
TYPE=Ethernet
IPADDR={{ p.ipaddress }}
NETMASK={{ p.netmask }}
{% if p.gateway %}
GATEWAY={{ p.gateway }}
{% endif %}
{% if p.noaliasrouting %}
NO_ALIASROUTING=yes
{% endif %}
{% else %}
{% if p.macaddress %}
HWADDR={{ p.macaddress }}
{% endif %}
ONBOOT={{ onboot }}
TYPE=Ethernet
{% if p.ipaddress %}
IPADDR={{ p.ipaddress }}
{% endif %}
{% if p.netmask %}
NETMASK={{ p.netmask }}
{% endif %}
{% if p.gateway %}
GATEWAY={{ p.gateway }}
{% endif %}
{% if p.mtu %}
MTU={{ p.mtu }}
{% endif %}
{% if p.dhcp_hostname %}
DHCP_HOSTNAME={{ p.dhcp_hostname }}
{% endif %}
{% if p.ethtool_opts %}
ETHTOOL_OPTS="{{ p.ethtool_opts }}"
{% endif %}
{% if p.bonding_opts %}
BONDING_OPTS="{{ p.bonding_opts }}"
{% endif %}
{% if p.master %}
MASTER={{ p.master }}
SLAVE=yes
{% endif %}
PEERDNS={{ p.peerdns | yesno }}
{% if dns1 %}
DNS1={{ dns1 }}
{% endif %}
{% if dns2 %}
DNS2={{ dns2 }}
{% endif %}
{% if p.domain %}
DOMAIN="{{ p.domain }}"
{% endif %}
{% if p.bridge %}
BRIDGE={{ p.bridge }}
{% endif %}
{% if p.linkdelay is not none %}
LINKDELAY={{ p.linkdelay }}
{% endif %}
{% if p.ipv6init %}
IPV6INIT=yes
{% if p.ipv6address %}
IPV6ADDR={{ p.ipv6address }}
{% endif %}
{% if p.ipv6gateway %}
IPV6_DEFAULTGW={{ p.ipv6gateway }}
{% endif %}
IPV6_AUTOCONF={{ p.ipv6autoconf | yesno }}
IPV6_PEERDNS={{ p.ipv6peerdns | yesno }}
{% endif %}
{% endif %}
USERCTL={{ p.userctl | yesno }}
NM_CONTROLLED=no
"""
)


ROUTE_TEMPLATE = ENV.from_string(
    HEADER
    + """\
{% for address, netmask, gateway in routes %}
ADDRESS{{ loop.index0 }}={{ address }}
NETMASK{{ loop.index0 }}={{ netmask }}
GATEWAY{{ loop.index0 }}={{ gateway }}
{% endfor %}
"""
)


GLOBAL_TEMPLATE = ENV.from_string(
    HEADER
    + """\
NETWORKING=yes
NETWORKING_IPV6={{ p.ipv6networking | yesno }}
{% if p.hostname %}
HOSTNAME={{ p.hostname }}
{% endif %}
{% if p.gateway %}
GATEWAY={{ p.gateway }}
{% endif %}
{% if p.gatewaydev %}
GATEWAYDEV={{ p.gatewaydev }}
{% endif %}
{% if p.ipv6gateway %}
IPV6_DEFAULTGW={{ p.ipv6gateway }}
{% endif %}
{% if p.ipv6defaultdev %}
IPV6_DEFAULTDEV={{ p.ipv6defaultdev }}
{% endif %}
{% if p.nisdomain %}
NISDOMAIN={{ p.nisdomain }}
{% endif %}
{% if p.vlan %}
VLAN=yes
{% endif %}
{% if p.nozeroconf %}
NOZEROCONF=yes
{% endif %}
"""
)


def render_ifcfg(  # pylint: disable=too-many-arguments
    interface: str,
    params: InterfaceParams,
    *,
    onboot: str | None = None,
    onparent: str | None = None,
    dns1: Any = None,
    dns2: Any = None,
) -> str:
    """Render an ifcfg file.

    Aliases (params.isalias) use the ONPARENT flag and the short alias layout,
    everything else uses ONBOOT and the full interface layout.
    """
    if params.isalias and onparent is None:
        raise ValueError("onparent is required when rendering an alias")
    if not params.isalias and onboot is None:
        raise ValueError("onboot is required when rendering an interface")
    return IFCFG_TEMPLATE.render(
        interface=interface,
        p=params,
        isalias=params.isalias,
        onboot=onboot,
        onparent=onparent,
        dns1=dns1,
        dns2=dns2,
    )


def render_route(params: RouteParams) -> str:
    """Render a route-<interface> file"""
    routes = zip(params.ipaddress, params.netmask, params.gateway)
    return ROUTE_TEMPLATE.render(routes=list(routes))


def render_global(params: GlobalParams) -> str:
    """Render /etc/sysconfig/network"""
    return GLOBAL_TEMPLATE.render(p=params)
