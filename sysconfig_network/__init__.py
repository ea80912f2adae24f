"""RedHat network-scripts configuration from structured data."""

from .catalog import Catalog, FileResource, ServiceResource
from .definitions import (
    alias,
    bond_alias,
    bond_dynamic,
    bond_slave,
    bond_static,
    create_resources,
    expand_store_tables,
    if_dynamic,
    if_static,
    route,
)
from .interface import ifcfg_path, network_if_base, normalize_dns
from .manifest import compile_catalog, network_global
from .service import include_network_service
from .store import ConfigStore

__all__ = [
    "Catalog",
    "ConfigStore",
    "FileResource",
    "ServiceResource",
    "alias",
    "bond_alias",
    "bond_dynamic",
    "bond_slave",
    "bond_static",
    "compile_catalog",
    "create_resources",
    "expand_store_tables",
    "if_dynamic",
    "if_static",
    "ifcfg_path",
    "include_network_service",
    "network_global",
    "network_if_base",
    "normalize_dns",
    "route",
]
