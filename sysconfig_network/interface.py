"""Interface file generator: turns one interface specification into an ifcfg file resource."""

import posixpath
import re
from typing import Any, TypeVar

from sysconfig_network.catalog import Catalog, FileResource
from sysconfig_network.exceptions import InvalidParameterError, translate_validation_errors
from sysconfig_network.logger import log
from sysconfig_network.params import InterfaceParams
from sysconfig_network.service import include_network_service, service_ref
from sysconfig_network.settings import get_setting
from sysconfig_network.template import render_ifcfg

INTERFACE_NAME = re.compile(r"[A-Za-z0-9_.:@-]+")

T = TypeVar("T")


def check_interface_name(name: str) -> str:
    """Return name if it is usable as a device name and file suffix.

    Raises:
     - InvalidParameterError: if name is empty or holds a slash, whitespace or shell syntax
    """
    if not INTERFACE_NAME.fullmatch(name) or name in (".", ".."):
        raise InvalidParameterError(f"Invalid interface name {name!r}")
    return name


def ifcfg_path(name: str) -> str:
    """Path of the ifcfg file for an interface, e.g. ``.../ifcfg-eth0``."""
    return posixpath.join(get_setting("NETWORK_SCRIPTS_DIR"), f"ifcfg-{check_interface_name(name)}")


def route_path(name: str) -> str:
    """Path of the route file for an interface, e.g. ``.../route-eth0``."""
    return posixpath.join(get_setting("NETWORK_SCRIPTS_DIR"), f"route-{check_interface_name(name)}")


def normalize_dns(dns1: T | None, dns2: T | None) -> tuple[T | None, T | None]:
    """Promote a lone secondary DNS server to primary, clearing the secondary."""
    if not dns1 and dns2:
        return dns2, None
    return dns1, dns2


def managed_file(path: str, content: str) -> FileResource:
    """Build a FileResource with the configured metadata that notifies the network service."""
    return FileResource(
        path=path,
        content=content,
        mode=get_setting("FILE_MODE"),
        owner=get_setting("FILE_OWNER"),
        group=get_setting("FILE_GROUP"),
        notify=[service_ref()],
    )


@translate_validation_errors("Network_if_base")
def network_if_base(catalog: Catalog, name: str, **params: Any) -> FileResource:
    """Declare the ifcfg file for one interface.

    Expands the configuration store tables first (once per catalog), then
    validates the parameters, makes sure the network service is declared,
    renders the file and adds it to the catalog.

    Raises:
     - InvalidParameterError: if a parameter is missing, unknown or of the wrong type,
       or name is not a valid interface name
     - UnsupportedPlatformError: if the host is not a RedHat family system
     - DuplicateResourceError: if the ifcfg file for name was already declared
    """
    # Import here to avoid circular dependency at module load time
    from sysconfig_network.definitions import expand_store_tables

    expand_store_tables(catalog)

    spec = InterfaceParams.model_validate(params)
    path = ifcfg_path(name)

    include_network_service(catalog)

    dns1, dns2 = normalize_dns(spec.dns1, spec.dns2)

    state = "yes" if spec.ensure == "up" else "no"
    if spec.isalias:
        content = render_ifcfg(name, spec, onparent=state, dns1=dns1, dns2=dns2)
    else:
        content = render_ifcfg(name, spec, onboot=state, dns1=dns1, dns2=dns2)

    resource = managed_file(path, content)
    catalog.add(resource)
    log.debug("Declared %s for interface %s (ensure=%s)", resource.ref, name, spec.ensure)
    return resource
