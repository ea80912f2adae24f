"""Desired-state resources and the catalog collecting them"""

from typing import Iterator, Literal

from pydantic import BaseModel, Field

from sysconfig_network.exceptions import DuplicateResourceError
from sysconfig_network.store import ConfigStore


class ServiceResource(BaseModel):
    """An OS service that must be running and enabled"""

    name: str
    ensure: Literal["running"] = "running"
    enable: bool = True
    hasrestart: bool = True
    hasstatus: bool = True

    @property
    def ref(self) -> str:
        return f"Service[{self.name}]"


class FileResource(BaseModel):
    """A managed text file"""

    path: str
    content: str
    mode: str = "0644"
    owner: str = "root"
    group: str = "root"
    notify: list[str] = Field(
        default_factory=list,
        description="References of resources refreshed when this file changes",
    )

    @property
    def ref(self) -> str:
        return f"File[{self.path}]"


Resource = ServiceResource | FileResource


class Catalog:
    """Compile context and the set of resources declared during one run.

    Holds the configuration store and host OS family that definitions read,
    the resources in declaration order, the definition instances declared so
    far, and which store tables have already been expanded.
    """

    def __init__(self, store: ConfigStore | None = None, os_family: str | None = None):
        self.store = store if store is not None else ConfigStore()
        self.os_family = os_family
        self._resources: dict[str, Resource] = {}
        self._instances: set[str] = set()
        self._expanded: set[str] = set()

    def add(self, resource: Resource) -> Resource:
        """Add a resource.

        Raises:
         - DuplicateResourceError: if a resource with the same reference exists
        """
        if resource.ref in self._resources:
            raise DuplicateResourceError(f"Duplicate declaration: {resource.ref} is already declared")
        self._resources[resource.ref] = resource
        return resource

    def declare(self, kind: str, title: str) -> str:
        """Record a definition instance and return its reference.

        Raises:
         - DuplicateResourceError: if the instance was already declared
        """
        ref = f"{kind}[{title}]"
        if ref in self._instances:
            raise DuplicateResourceError(f"Duplicate declaration: {ref} is already declared")
        self._instances.add(ref)
        return ref

    def mark_expanded(self, key: str) -> bool:
        """Return True the first time key is marked, False afterwards."""
        if key in self._expanded:
            return False
        self._expanded.add(key)
        return True

    def get(self, ref: str) -> Resource | None:
        return self._resources.get(ref)

    def has_instance(self, ref: str) -> bool:
        return ref in self._instances

    @property
    def instances(self) -> set[str]:
        return set(self._instances)

    @property
    def resources(self) -> list[Resource]:
        return list(self._resources.values())

    @property
    def files(self) -> list[FileResource]:
        return [r for r in self._resources.values() if isinstance(r, FileResource)]

    @property
    def services(self) -> list[ServiceResource]:
        return [r for r in self._resources.values() if isinstance(r, ServiceResource)]

    def __contains__(self, ref: object) -> bool:
        return ref in self._resources

    def __iter__(self) -> Iterator[Resource]:
        return iter(list(self._resources.values()))

    def __len__(self) -> int:
        return len(self._resources)
