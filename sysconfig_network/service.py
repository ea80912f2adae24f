"""Network service declaration and host platform detection."""

from sysconfig_network.catalog import Catalog, ServiceResource
from sysconfig_network.exceptions import UnsupportedPlatformError
from sysconfig_network.logger import log
from sysconfig_network.settings import get_setting

SUPPORTED_OS_FAMILY = "RedHat"

OS_RELEASE_FILE = "/etc/os-release"

# os-release ID / ID_LIKE values that belong to the RedHat family
REDHAT_IDS = frozenset(
    {"rhel", "redhat", "centos", "fedora", "rocky", "almalinux", "ol", "amzn", "scientific"}
)


def service_ref() -> str:
    """Reference of the managed network service, e.g. ``Service[network]``."""
    return f"Service[{get_setting('SERVICE_NAME')}]"


def include_network_service(catalog: Catalog) -> ServiceResource:
    """Declare the network service once per catalog.

    Repeated calls return the already declared resource.

    Raises:
     - UnsupportedPlatformError: if the catalog's OS family is not RedHat
    """
    if catalog.os_family != SUPPORTED_OS_FAMILY:
        raise UnsupportedPlatformError(
            f"This network module only supports {SUPPORTED_OS_FAMILY} family systems, "
            f"not {catalog.os_family or 'unknown'}"
        )

    existing = catalog.get(service_ref())
    if isinstance(existing, ServiceResource):
        return existing

    service = ServiceResource(
        name=get_setting("SERVICE_NAME"),
        ensure="running",
        enable=True,
        hasrestart=True,
        hasstatus=True,
    )
    catalog.add(service)
    log.debug("Declared %s", service.ref)
    return service


def parse_os_release(text: str) -> dict[str, str]:
    """Parse os-release KEY=value lines, dropping quotes."""
    fields = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        fields[key.strip()] = value.strip().strip("\"'")
    return fields


def os_family_from_release(fields: dict[str, str]) -> str | None:
    """Map os-release fields to an OS family name."""
    ids = [fields.get("ID", "").lower()] + fields.get("ID_LIKE", "").lower().split()
    if any(i in REDHAT_IDS for i in ids):
        return SUPPORTED_OS_FAMILY
    os_id = fields.get("ID")
    return os_id.capitalize() if os_id else None


def detect_os_family(os_release_file: str = OS_RELEASE_FILE) -> str | None:
    """Return the host OS family, honoring the OS_FAMILY setting."""
    override = get_setting("OS_FAMILY")
    if override:
        return override
    try:
        with open(os_release_file, encoding="utf-8") as f:
            fields = parse_os_release(f.read())
    except OSError:
        log.warning("Cannot read %s, OS family unknown", os_release_file)
        return None
    return os_family_from_release(fields)
