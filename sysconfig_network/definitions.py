"""
Interface, bond and route definitions.

Each definition validates its own parameter set, records its instance in the
catalog and delegates to network_if_base with the values fixed for its kind.
The configuration store tables named in STORE_TABLES are expanded into one
definition call per entry.
"""

from typing import Any, Callable, Mapping

from sysconfig_network.catalog import Catalog, FileResource
from sysconfig_network.exceptions import InvalidParameterError, translate_validation_errors
from sysconfig_network.interface import managed_file, network_if_base, route_path
from sysconfig_network.logger import log
from sysconfig_network.params import (
    AliasParams,
    BondAliasParams,
    BondDynamicParams,
    BondSlaveParams,
    BondStaticParams,
    DynamicInterfaceParams,
    RouteParams,
    StaticInterfaceParams,
)
from sysconfig_network.service import include_network_service
from sysconfig_network.template import render_route

Definition = Callable[..., FileResource]


@translate_validation_errors("Network::If::Static")
def if_static(catalog: Catalog, name: str, **params: Any) -> FileResource:
    """Interface with a static IPv4 address."""
    p = StaticInterfaceParams.model_validate(params)
    catalog.declare("Network::If::Static", name)
    return network_if_base(catalog, name, bootproto="none", **p.model_dump())


@translate_validation_errors("Network::If::Dynamic")
def if_dynamic(catalog: Catalog, name: str, **params: Any) -> FileResource:
    """Interface configured by DHCP or BOOTP."""
    p = DynamicInterfaceParams.model_validate(params)
    catalog.declare("Network::If::Dynamic", name)
    return network_if_base(catalog, name, ipaddress="", netmask="", **p.model_dump())


@translate_validation_errors("Network::If::Alias")
def alias(catalog: Catalog, name: str, **params: Any) -> FileResource:
    """Secondary address on an existing interface, e.g. eth0:1."""
    p = AliasParams.model_validate(params)
    catalog.declare("Network::If::Alias", name)
    return network_if_base(catalog, name, macaddress="", isalias=True, **p.model_dump())


@translate_validation_errors("Network::Bond::Static")
def bond_static(catalog: Catalog, name: str, **params: Any) -> FileResource:
    """Bond master with a static IPv4 address."""
    p = BondStaticParams.model_validate(params)
    catalog.declare("Network::Bond::Static", name)
    return network_if_base(catalog, name, macaddress="", bootproto="none", **p.model_dump())


@translate_validation_errors("Network::Bond::Dynamic")
def bond_dynamic(catalog: Catalog, name: str, **params: Any) -> FileResource:
    """Bond master configured by DHCP or BOOTP."""
    p = BondDynamicParams.model_validate(params)
    catalog.declare("Network::Bond::Dynamic", name)
    return network_if_base(
        catalog, name, ipaddress="", netmask="", macaddress="", **p.model_dump()
    )


@translate_validation_errors("Network::Bond::Slave")
def bond_slave(catalog: Catalog, name: str, **params: Any) -> FileResource:
    """Physical interface enslaved to a bond master. Always brought up with its master."""
    p = BondSlaveParams.model_validate(params)
    catalog.declare("Network::Bond::Slave", name)
    return network_if_base(
        catalog,
        name,
        ensure="up",
        ipaddress="",
        netmask="",
        bootproto="none",
        **p.model_dump(),
    )


@translate_validation_errors("Network::Bond::Alias")
def bond_alias(catalog: Catalog, name: str, **params: Any) -> FileResource:
    """Secondary address on a bond master, e.g. bond0:1."""
    p = BondAliasParams.model_validate(params)
    catalog.declare("Network::Bond::Alias", name)
    return network_if_base(catalog, name, macaddress="", isalias=True, **p.model_dump())


@translate_validation_errors("Network::Route")
def route(catalog: Catalog, name: str, **params: Any) -> FileResource:
    """Static routes for an interface, written to route-<name>."""
    p = RouteParams.model_validate(params)
    catalog.declare("Network::Route", name)
    include_network_service(catalog)

    resource = managed_file(route_path(name), render_route(p))
    catalog.add(resource)
    log.debug("Declared %s with %d routes", resource.ref, len(p.ipaddress))
    return resource


# Configuration store keys and the definition each table entry is passed to
STORE_TABLES: dict[str, Definition] = {
    "network::if::static": if_static,
    "network::if::dynamic": if_dynamic,
    "network::if::alias": alias,
    "network::bond::static": bond_static,
    "network::bond::dynamic": bond_dynamic,
    "network::bond::slave": bond_slave,
    "network::bond::alias": bond_alias,
    "network::route": route,
}

RESERVED_PARAMS = frozenset({"catalog", "name"})


def create_resources(
    catalog: Catalog, definition: Definition, table: Mapping[str, Any]
) -> list[FileResource]:
    """Call definition once per table entry, using the key as the title.

    Raises:
     - InvalidParameterError: if an entry is not a mapping of parameters
    """
    declared = []
    for title, entry in table.items():
        if entry is None:
            entry = {}
        if not isinstance(entry, Mapping):
            raise InvalidParameterError(
                f"Parameters for {title} must be a mapping, got {type(entry).__name__}"
            )
        params = {str(k): v for k, v in entry.items()}
        reserved = RESERVED_PARAMS.intersection(params)
        if reserved:
            raise InvalidParameterError(
                f"Parameters for {title} may not include {', '.join(sorted(reserved))}"
            )
        declared.append(definition(catalog, str(title), **params))
    return declared


def expand_store_tables(catalog: Catalog) -> int:
    """Expand every configuration store table not yet expanded in this catalog.

    Returns the number of table entries this call expanded directly; tables
    expanded by nested definition calls are not counted here.
    """
    count = 0
    for key, definition in STORE_TABLES.items():
        if not catalog.mark_expanded(key):
            continue
        table = catalog.store.lookup_hash(key)
        if not table:
            continue
        log.info("Expanding %d entries from %s", len(table), key)
        count += len(create_resources(catalog, definition, table))
    return count
