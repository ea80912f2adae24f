"""
Convergence of a compiled catalog onto the host.

Files are written first; every file that changed queues a refresh of the
resources it notifies. Services are then made running and enabled, and each
service with a queued refresh is restarted once, unless it was just started.
"""

import grp
import os
import pwd
import subprocess
import tempfile

from pydantic import BaseModel, Field

from sysconfig_network.catalog import Catalog, FileResource, ServiceResource
from sysconfig_network.exceptions import ApplyError
from sysconfig_network.logger import log


class ApplyReport(BaseModel):
    """What an apply run changed, or would have changed in noop mode"""

    noop: bool = False
    changed_files: list[str] = Field(default_factory=list)
    started_services: list[str] = Field(default_factory=list)
    enabled_services: list[str] = Field(default_factory=list)
    restarted_services: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(
            self.changed_files
            or self.started_services
            or self.enabled_services
            or self.restarted_services
        )


class SystemctlRunner:
    """Runs systemctl for service state queries and changes."""

    def __init__(self, systemctl: str = "systemctl") -> None:
        self.systemctl = systemctl

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        cmd = [self.systemctl, *args]
        log.debug("Executing command: %s", " ".join(cmd))
        try:
            return subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise ApplyError(f"Cannot execute {self.systemctl}: {e}") from e

    def _change(self, action: str, name: str) -> None:
        result = self._run(action, name)
        if result.returncode != 0:
            log.error(
                "Command failed: %s %s %s, Error: %s",
                self.systemctl,
                action,
                name,
                result.stderr.strip(),
            )
            raise ApplyError(
                f"Failed to {action} service {name}: {result.stderr.strip() or result.returncode}"
            )

    def is_active(self, name: str) -> bool:
        return self._run("is-active", "--quiet", name).returncode == 0

    def is_enabled(self, name: str) -> bool:
        return self._run("is-enabled", "--quiet", name).returncode == 0

    def start(self, name: str) -> None:
        self._change("start", name)

    def enable(self, name: str) -> None:
        self._change("enable", name)

    def restart(self, name: str) -> None:
        self._change("restart", name)


class Applier:
    """Makes the host match a catalog."""

    def __init__(
        self,
        root_dir: str = "/",
        manage_ownership: bool = True,
        noop: bool = False,
        runner: SystemctlRunner | None = None,
    ) -> None:
        self.root_dir = root_dir
        self.manage_ownership = manage_ownership
        self.noop = noop
        self.runner = runner or SystemctlRunner()

    def target_path(self, path: str) -> str:
        """Host path of a managed file under root_dir."""
        return os.path.join(self.root_dir, path.lstrip("/"))

    def apply(self, catalog: Catalog) -> ApplyReport:
        """Converge every resource in the catalog.

        Raises:
         - ApplyError: if a file can't be written or a service command fails
        """
        report = ApplyReport(noop=self.noop)
        pending: set[str] = set()

        for resource in catalog.files:
            if self.sync_file(resource):
                report.changed_files.append(resource.path)
                pending.update(resource.notify)

        for ref in sorted(pending):
            if ref not in catalog:
                log.warning("Notify target %s is not declared, ignoring", ref)

        for service in catalog.services:
            started = self.sync_service(service, report)
            if service.ref not in pending:
                continue
            if started:
                log.info("%s was started in this run, skipping restart", service.ref)
                continue
            log.info("Restarting %s", service.ref)
            if not self.noop:
                self.runner.restart(service.name)
            report.restarted_services.append(service.name)

        return report

    def sync_file(self, resource: FileResource) -> bool:
        """Write the file when content, mode or ownership differ. Returns True on change."""
        target = self.target_path(resource.path)
        content = resource.content.encode("utf-8")
        mode = int(resource.mode, 8)

        try:
            with open(target, "rb") as f:
                current: bytes | None = f.read()
        except FileNotFoundError:
            current = None
        except OSError as e:
            raise ApplyError(f"Cannot read {target}: {e.strerror}") from e

        changed = current != content
        if changed:
            log.info("%s %s", "Would write" if self.noop else "Writing", resource.ref)
            if not self.noop:
                self._write(target, content, mode)
            elif current is None:
                return True

        st = os.stat(target)
        if st.st_mode & 0o7777 != mode:
            log.info("Setting mode of %s to %s", resource.ref, resource.mode)
            if not self.noop:
                os.chmod(target, mode)
            changed = True

        if self.manage_ownership:
            uid, gid = self._ids(resource)
            if (st.st_uid, st.st_gid) != (uid, gid):
                log.info(
                    "Setting ownership of %s to %s:%s",
                    resource.ref,
                    resource.owner,
                    resource.group,
                )
                if not self.noop:
                    try:
                        os.chown(target, uid, gid)
                    except OSError as e:
                        raise ApplyError(f"Cannot chown {target}: {e.strerror}") from e
                changed = True

        return changed

    def sync_service(self, service: ServiceResource, report: ApplyReport) -> bool:
        """Make the service running and enabled. Returns True if it was started."""
        started = False
        if not self.runner.is_active(service.name):
            log.info("Starting %s", service.ref)
            if not self.noop:
                self.runner.start(service.name)
            report.started_services.append(service.name)
            started = True

        if service.enable and not self.runner.is_enabled(service.name):
            log.info("Enabling %s", service.ref)
            if not self.noop:
                self.runner.enable(service.name)
            report.enabled_services.append(service.name)

        return started

    @staticmethod
    def _ids(resource: FileResource) -> tuple[int, int]:
        try:
            uid = pwd.getpwnam(resource.owner).pw_uid
            gid = grp.getgrnam(resource.group).gr_gid
        except KeyError as e:
            raise ApplyError(
                f"Unknown owner or group {resource.owner}:{resource.group} for {resource.path}"
            ) from e
        return uid, gid

    @staticmethod
    def _write(target: str, content: bytes, mode: int) -> None:
        directory = os.path.dirname(target)
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=directory, prefix=".sysconfig-network-")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(content)
                os.chmod(tmp, mode)
                os.replace(tmp, target)
            except OSError:
                os.unlink(tmp)
                raise
        except OSError as e:
            raise ApplyError(f"Cannot write {target}: {e.strerror}") from e
