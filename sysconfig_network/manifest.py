"""Catalog compilation entry points."""

from typing import Any

from sysconfig_network.catalog import Catalog, FileResource
from sysconfig_network.definitions import expand_store_tables
from sysconfig_network.exceptions import InvalidParameterError, translate_validation_errors
from sysconfig_network.interface import managed_file
from sysconfig_network.logger import log
from sysconfig_network.params import GlobalParams
from sysconfig_network.service import include_network_service
from sysconfig_network.settings import get_setting
from sysconfig_network.store import ConfigStore
from sysconfig_network.template import render_global

GLOBAL_KEY = "network::global"


@translate_validation_errors("Network::Global")
def network_global(catalog: Catalog, name: str = "network", **params: Any) -> FileResource:
    """Declare /etc/sysconfig/network."""
    p = GlobalParams.model_validate(params)
    catalog.declare("Network::Global", name)
    include_network_service(catalog)

    resource = managed_file(get_setting("SYSCONFIG_NETWORK_FILE"), render_global(p))
    catalog.add(resource)
    return resource


def compile_catalog(store: ConfigStore, os_family: str | None) -> Catalog:
    """Build the full catalog for a host from its configuration store.

    The service is declared first so an unsupported platform fails before
    anything else is evaluated. Any error propagates and no catalog is
    returned, so nothing is applied.
    """
    catalog = Catalog(store, os_family)
    include_network_service(catalog)

    global_params = store.lookup(GLOBAL_KEY)
    if global_params is not None:
        if not isinstance(global_params, dict):
            raise InvalidParameterError(
                f"{GLOBAL_KEY} must be a mapping, got {type(global_params).__name__}"
            )
        network_global(catalog, **{str(k): v for k, v in global_params.items()})

    expand_store_tables(catalog)
    log.info(
        "Compiled catalog with %d resources from %d definitions",
        len(catalog),
        len(catalog.instances),
    )
    return catalog
