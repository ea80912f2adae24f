"""
Exception classes for compiling and applying network configuration.

This module also provides the decorator that turns parameter validation
failures inside a definition into InvalidParameterError.
"""

import inspect
from typing import Callable, TypeVar, ParamSpec
from functools import wraps

from pydantic import ValidationError

from sysconfig_network.logger import log


class NetworkConfigError(Exception):
    """Base class for all sysconfig-network errors."""


class UnsupportedPlatformError(NetworkConfigError):
    """The host operating system family is not supported."""


class InvalidParameterError(NetworkConfigError):
    """A definition was given invalid parameters."""


class DuplicateResourceError(NetworkConfigError):
    """A resource or definition instance was declared twice."""


class ConfigStoreError(NetworkConfigError):
    """The configuration store could not be loaded or holds bad data."""


class ApplyError(NetworkConfigError):
    """Converging a resource failed."""


# Type variables for the decorator
P = ParamSpec("P")
T = TypeVar("T")


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic ValidationError as a single line."""
    parts = []
    for e in error.errors():
        field = ".".join(str(loc) for loc in e["loc"]) or "<root>"
        parts.append(f"{field}: {e['msg']}")
    return "; ".join(parts)


def translate_validation_errors(
    kind: str,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorate a definition so parameter validation failures become InvalidParameterError.

    The decorated function must take the instance title as its "name"
    parameter; the title is used to build the resource reference in the
    error message.

    Args:
        kind: Definition kind used in error messages, e.g. "Network::If::Static".

    Returns:
        Decorator for definition functions.
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except ValidationError as e:
                bound = inspect.signature(func).bind_partial(*args, **kwargs)
                bound.apply_defaults()
                title = bound.arguments.get("name", "?")
                ref = f"{kind}[{title}]"
                log.error("Invalid parameters for %s: %s", ref, e)
                raise InvalidParameterError(
                    f"Invalid parameters for {ref}: {format_validation_error(e)}"
                ) from e

        return wrapper

    return decorator
