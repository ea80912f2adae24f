"""Main entry point for sysconfig-network."""

import argparse
from typing import Sequence

from sysconfig_network.apply import Applier
from sysconfig_network.exceptions import NetworkConfigError
from sysconfig_network.logger import configure_logging
from sysconfig_network.manifest import compile_catalog
from sysconfig_network.service import detect_os_family
from sysconfig_network.settings import validate_config
from sysconfig_network.store import ConfigStore


def build_parser() -> argparse.ArgumentParser:
    """Command line options; unset options fall back to settings."""
    parser = argparse.ArgumentParser(
        prog="sysconfig-network",
        description="Render RedHat network-scripts files from YAML data and apply them",
    )
    parser.add_argument(
        "--data",
        action="append",
        metavar="FILE",
        help="YAML data file, highest priority first; repeatable (default: DATA_FILES setting)",
    )
    parser.add_argument(
        "--noop",
        action="store_true",
        help="Report what would change without touching the host (default: False)",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Write files below this directory (default: ROOT_DIR setting)",
    )
    parser.add_argument(
        "--os-family",
        default=None,
        help="Override the detected OS family (default: detected from /etc/os-release)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Compile the catalog from the data files and apply it.

    Returns the process exit status.
    """
    # Import inside function so settings reloaded after import are honored
    from sysconfig_network.settings import settings

    args = build_parser().parse_args(argv)
    log = configure_logging()

    try:
        validate_config(settings)

        data_files = args.data or settings.DATA_FILES
        os_family = args.os_family or detect_os_family()
        log.info(
            "Configuration: DATA_FILES=%s, OS_FAMILY=%s, ROOT_DIR=%s, NOOP=%s",
            data_files,
            os_family,
            args.root or settings.ROOT_DIR,
            args.noop,
        )

        store = ConfigStore.from_files(data_files)
        catalog = compile_catalog(store, os_family)

        applier = Applier(
            root_dir=args.root or settings.ROOT_DIR,
            manage_ownership=settings.MANAGE_OWNERSHIP,
            noop=args.noop,
        )
        report = applier.apply(catalog)
    except NetworkConfigError as e:
        log.error("%s", e)
        return 1
    except ValueError as e:
        log.error("Invalid configuration: %s", e)
        return 2

    log.info(
        "%s: %d files changed, restarted services: %s",
        "Noop run finished" if report.noop else "Run finished",
        len(report.changed_files),
        ", ".join(report.restarted_services) or "none",
    )
    return 0
