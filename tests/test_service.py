"""
Unit tests for the network service declaration and platform detection.
"""

import pytest

from sysconfig_network.catalog import Catalog, ServiceResource
from sysconfig_network.exceptions import UnsupportedPlatformError
from sysconfig_network.service import (
    detect_os_family,
    include_network_service,
    os_family_from_release,
    parse_os_release,
)
import sysconfig_network.settings as settings_mod


class TestIncludeNetworkService:
    """Test include_network_service."""

    def test_declares_running_enabled_service(self):
        """On RedHat the service is declared running and enabled."""
        catalog = Catalog(os_family="RedHat")

        service = include_network_service(catalog)

        assert isinstance(service, ServiceResource)
        assert service.name == "network"
        assert service.ensure == "running"
        assert service.enable is True
        assert service.hasrestart is True
        assert service.hasstatus is True
        assert catalog.get("Service[network]") is service

    def test_idempotent(self):
        """Repeated inclusion returns the same resource and declares nothing new."""
        catalog = Catalog(os_family="RedHat")
        first = include_network_service(catalog)
        second = include_network_service(catalog)
        assert first is second
        assert len(catalog) == 1

    @pytest.mark.parametrize("os_family", ["Debian", "Suse", "redhat", None])
    def test_unsupported_platform(self, os_family):
        """Any other family fails before anything is declared."""
        catalog = Catalog(os_family=os_family)
        with pytest.raises(UnsupportedPlatformError, match="only supports RedHat"):
            include_network_service(catalog)
        assert len(catalog) == 0

    def test_service_name_setting(self, monkeypatch):
        """The service name comes from settings."""
        monkeypatch.setattr(settings_mod.settings, "SERVICE_NAME", "network-legacy")
        catalog = Catalog(os_family="RedHat")
        service = include_network_service(catalog)
        assert service.ref == "Service[network-legacy]"


class TestOsFamily:
    """Test OS family detection."""

    def test_parse_os_release(self):
        """Quotes and comments are handled."""
        fields = parse_os_release(
            '# comment\nNAME="Rocky Linux"\nID="rocky"\nID_LIKE="rhel centos fedora"\n\n'
        )
        assert fields["NAME"] == "Rocky Linux"
        assert fields["ID"] == "rocky"
        assert fields["ID_LIKE"] == "rhel centos fedora"

    @pytest.mark.parametrize(
        "fields,expected",
        [
            ({"ID": "rhel"}, "RedHat"),
            ({"ID": "centos", "ID_LIKE": "rhel fedora"}, "RedHat"),
            ({"ID": "myos", "ID_LIKE": "fedora"}, "RedHat"),
            ({"ID": "debian"}, "Debian"),
            ({}, None),
        ],
    )
    def test_os_family_from_release(self, fields, expected):
        """RedHat derivatives map to RedHat, others to their capitalized ID."""
        assert os_family_from_release(fields) == expected

    def test_detect_from_file(self, tmp_path, monkeypatch):
        """Detection reads os-release when no override is set."""
        monkeypatch.setattr(settings_mod.settings, "OS_FAMILY", None)
        os_release = tmp_path / "os-release"
        os_release.write_text('ID="almalinux"\nID_LIKE="rhel centos fedora"\n')
        assert detect_os_family(str(os_release)) == "RedHat"

    def test_detect_override(self, tmp_path, monkeypatch):
        """The OS_FAMILY setting wins over os-release."""
        monkeypatch.setattr(settings_mod.settings, "OS_FAMILY", "RedHat")
        os_release = tmp_path / "os-release"
        os_release.write_text("ID=debian\n")
        assert detect_os_family(str(os_release)) == "RedHat"

    def test_detect_missing_file(self, tmp_path, monkeypatch):
        """An unreadable os-release gives an unknown family."""
        monkeypatch.setattr(settings_mod.settings, "OS_FAMILY", None)
        assert detect_os_family(str(tmp_path / "nope")) is None
