# type: ignore
"""
Unit tests for the interface file generator.
"""

import pytest

from sysconfig_network.catalog import Catalog
from sysconfig_network.exceptions import (
    DuplicateResourceError,
    InvalidParameterError,
    UnsupportedPlatformError,
)
from sysconfig_network.interface import ifcfg_path, network_if_base, normalize_dns
from sysconfig_network.store import ConfigStore

STATIC_TABLE = {
    "eth0": {
        "ensure": "up",
        "ipaddress": "10.0.0.5",
        "netmask": "255.255.255.0",
        "macaddress": "00:11:22:33:44:55",
    },
    "eth1": {
        "ensure": "down",
        "ipaddress": "10.0.1.5",
        "netmask": "255.255.255.0",
        "macaddress": "00:11:22:33:44:66",
    },
}


@pytest.fixture
def catalog():
    return Catalog(ConfigStore(), "RedHat")


@pytest.fixture
def params():
    return {
        "ensure": "up",
        "ipaddress": "10.0.0.5",
        "netmask": "255.255.255.0",
        "macaddress": "00:11:22:33:44:55",
    }


class TestNormalizeDns:
    """Test DNS server precedence."""

    def test_secondary_only_is_promoted(self):
        assert normalize_dns(None, "2.2.2.2") == ("2.2.2.2", None)

    def test_empty_primary_is_promoted(self):
        assert normalize_dns("", "2.2.2.2") == ("2.2.2.2", None)

    def test_both_unchanged(self):
        assert normalize_dns("1.1.1.1", "2.2.2.2") == ("1.1.1.1", "2.2.2.2")

    def test_primary_only_unchanged(self):
        assert normalize_dns("1.1.1.1", None) == ("1.1.1.1", None)

    def test_neither(self):
        assert normalize_dns(None, None) == (None, None)


class TestIfcfgPath:
    """Test the file path derivation."""

    def test_eth0(self):
        assert ifcfg_path("eth0") == "/etc/sysconfig/network-scripts/ifcfg-eth0"

    def test_alias(self):
        assert ifcfg_path("eth0:1") == "/etc/sysconfig/network-scripts/ifcfg-eth0:1"

    def test_vlan(self):
        assert ifcfg_path("eth0.100") == "/etc/sysconfig/network-scripts/ifcfg-eth0.100"

    @pytest.mark.parametrize(
        "name", ["eth0/../x", "../../etc/passwd", "eth 0", "eth0\n", "", "..", 'eth0"', "eth0;reboot"]
    )
    def test_invalid_names(self, name):
        """Names that would leave the scripts directory or break DEVICE= are rejected."""
        with pytest.raises(InvalidParameterError, match="Invalid interface name"):
            ifcfg_path(name)


class TestNetworkIfBase:
    """Test network_if_base."""

    def test_declares_file_notifying_service(self, catalog, params):
        """The ifcfg file is declared with fixed metadata and a notify edge."""
        resource = network_if_base(catalog, "eth0", **params)

        assert resource.path == "/etc/sysconfig/network-scripts/ifcfg-eth0"
        assert resource.mode == "0644"
        assert resource.owner == "root"
        assert resource.group == "root"
        assert resource.notify == ["Service[network]"]
        assert "Service[network]" in catalog
        assert catalog.get(resource.ref) is resource

    def test_primary_template_down(self, catalog, params):
        """A non-alias interface maps ensure to ONBOOT."""
        params["ensure"] = "down"
        resource = network_if_base(catalog, "eth0", **params)

        assert "ONBOOT=no\n" in resource.content
        assert "HWADDR=00:11:22:33:44:55\n" in resource.content
        assert "ONPARENT" not in resource.content

    def test_alias_template_up(self, catalog, params):
        """An alias maps ensure to ONPARENT."""
        resource = network_if_base(catalog, "eth0:1", isalias=True, **params)

        assert "ONPARENT=yes\n" in resource.content
        assert "ONBOOT" not in resource.content
        assert "HWADDR" not in resource.content

    def test_dns_secondary_promoted(self, catalog, params):
        """A lone secondary DNS server is written as DNS1."""
        resource = network_if_base(catalog, "eth0", dns2="2.2.2.2", **params)

        assert "DNS1=2.2.2.2\n" in resource.content
        assert "DNS2=" not in resource.content

    def test_dns_both_kept(self, catalog, params):
        """Both DNS servers are written unchanged."""
        resource = network_if_base(catalog, "eth0", dns1="1.1.1.1", dns2="2.2.2.2", **params)

        assert "DNS1=1.1.1.1\nDNS2=2.2.2.2\n" in resource.content

    @pytest.mark.parametrize("ensure", ["UP", "Down", "present", "", "absent"])
    def test_invalid_ensure(self, catalog, params, ensure):
        """ensure must be exactly up or down."""
        params["ensure"] = ensure
        with pytest.raises(InvalidParameterError, match=r"Network_if_base\[eth0\]: ensure"):
            network_if_base(catalog, "eth0", **params)
        assert catalog.files == []

    @pytest.mark.parametrize(
        "field", ["userctl", "peerdns", "isalias", "ipv6init", "ipv6autoconf", "ipv6peerdns"]
    )
    @pytest.mark.parametrize("value", ["true", "yes", 1, 0, None])
    def test_booleans_must_be_booleans(self, catalog, params, field, value):
        """Boolean fields only accept true and false."""
        params[field] = value
        with pytest.raises(InvalidParameterError, match=field):
            network_if_base(catalog, "eth0", **params)

    @pytest.mark.parametrize("field", ["ensure", "ipaddress", "netmask", "macaddress"])
    def test_required_fields(self, catalog, params, field):
        """Required fields can't be omitted."""
        del params[field]
        with pytest.raises(InvalidParameterError, match=field):
            network_if_base(catalog, "eth0", **params)

    def test_unknown_parameter(self, catalog, params):
        """Unknown parameters are rejected."""
        with pytest.raises(InvalidParameterError, match="ipaddr"):
            network_if_base(catalog, "eth0", ipaddr="10.0.0.5", **params)

    def test_unsupported_platform(self, params):
        """A non-RedHat host fails and declares nothing."""
        catalog = Catalog(ConfigStore(), "Debian")
        with pytest.raises(UnsupportedPlatformError):
            network_if_base(catalog, "eth0", **params)
        assert len(catalog) == 0

    def test_duplicate_interface(self, catalog, params):
        """The same interface can't be generated twice."""
        network_if_base(catalog, "eth0", **params)
        with pytest.raises(DuplicateResourceError):
            network_if_base(catalog, "eth0", **params)

    def test_invalid_name_declares_nothing(self, catalog, params):
        """A name outside ifcfg-<name> fails before anything is declared."""
        with pytest.raises(InvalidParameterError, match="Invalid interface name"):
            network_if_base(catalog, "eth0/../../../tmp/x", **params)
        assert len(catalog) == 0

    def test_value_cannot_inject_keys(self, catalog, params):
        """A down interface can't be switched on through another field."""
        params["ensure"] = "down"
        params["ipaddress"] = "10.0.0.5\nONBOOT=yes"
        with pytest.raises(InvalidParameterError, match=r"Network_if_base\[eth0\]: ipaddress"):
            network_if_base(catalog, "eth0", **params)
        assert catalog.files == []

    @pytest.mark.parametrize("field", ["mtu", "linkdelay"])
    def test_integer_rejects_boolean(self, catalog, params, field):
        """A YAML yes is not an MTU or a link delay."""
        params[field] = True
        with pytest.raises(InvalidParameterError, match=field):
            network_if_base(catalog, "eth0", **params)


class TestStoreExpansion:
    """Test the data-driven expansion performed by network_if_base."""

    def test_absent_tables_declare_nothing(self, catalog, params):
        """Without store tables only the interface itself is declared."""
        network_if_base(catalog, "eth2", **params)

        assert catalog.instances == set()
        assert [f.path for f in catalog.files] == [ifcfg_path("eth2")]

    def test_present_table_declares_one_per_entry(self, params):
        """Each entry of a table becomes one sibling declaration."""
        catalog = Catalog(ConfigStore([{"network::if::static": STATIC_TABLE}]), "RedHat")

        network_if_base(catalog, "eth2", **params)

        assert catalog.instances == {
            "Network::If::Static[eth0]",
            "Network::If::Static[eth1]",
        }
        assert sorted(f.path for f in catalog.files) == [
            ifcfg_path("eth0"),
            ifcfg_path("eth1"),
            ifcfg_path("eth2"),
        ]
        assert "ONBOOT=no\n" in catalog.get(f"File[{ifcfg_path('eth1')}]").content

    def test_tables_expand_once(self, params):
        """Later generator calls don't declare the siblings again."""
        catalog = Catalog(ConfigStore([{"network::if::static": STATIC_TABLE}]), "RedHat")

        network_if_base(catalog, "eth2", **params)
        network_if_base(catalog, "eth3", **params)

        assert len(catalog.files) == 4
        assert len(catalog.services) == 1

    def test_invalid_entry_aborts(self, params):
        """A bad entry in a table fails the generator."""
        table = {"eth0": dict(STATIC_TABLE["eth0"], ensure="sideways")}
        catalog = Catalog(ConfigStore([{"network::if::static": table}]), "RedHat")

        with pytest.raises(InvalidParameterError, match=r"Network::If::Static\[eth0\]"):
            network_if_base(catalog, "eth2", **params)
        assert ifcfg_path("eth2") not in [f.path for f in catalog.files]
