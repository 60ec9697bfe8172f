"""Execution sides and side detection.

Provides :class:`Side` (the tag values a constructor may be reserved for),
the :class:`SideDetector` protocol consumed by the activator, and the two
built-in detectors: :class:`ContextSideDetector`, backed by a
:class:`contextvars.ContextVar` with an environment fallback, and
:class:`FixedSideDetector`.
"""

import contextvars
import os
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Mapping, Optional, Protocol, Union, runtime_checkable

from .constants import SIDE_ENV_VAR
from .exceptions import ConfigurationError

_current_side: contextvars.ContextVar[Optional["Side"]] = contextvars.ContextVar("sided_ioc_side", default=None)


class Side(str, Enum):
    """The side of the application a constructor is reserved for.

    ``UNIVERSAL`` marks a constructor as usable on every side; it never makes
    a constructor preferred over its untagged siblings.
    """

    CLIENT = "client"
    SERVER = "server"
    UNIVERSAL = "universal"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union[str, "Side"]) -> "Side":
        """Convert a side name (case-insensitive) to a :class:`Side`.

        Raises:
            ConfigurationError: If *value* does not name a side.
        """
        if isinstance(value, Side):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ConfigurationError(f"Unknown side '{value}'; expected one of: {allowed}") from None

    @property
    def is_concrete(self) -> bool:
        return self is not Side.UNIVERSAL


@runtime_checkable
class SideDetector(Protocol):
    """Reports the side the current code is running on."""

    def current_side(self) -> Side: ...


class FixedSideDetector:
    """Detector that always reports the same side."""

    def __init__(self, side: Union[str, Side]) -> None:
        self._side = Side.parse(side)

    def current_side(self) -> Side:
        return self._side

    def __repr__(self) -> str:
        return f"FixedSideDetector({self._side.value!r})"


class ContextSideDetector:
    """Detector backed by the active :func:`side_scope`.

    Resolution order:
      1. the side set by the innermost :func:`side_scope` in this context,
      2. the ``SIDED_IOC_SIDE`` environment variable,
      3. *default*.

    Args:
        environ: Mapping consulted instead of ``os.environ``.
        default: Side reported when neither a scope nor the environment sets one.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None, default: Side = Side.SERVER) -> None:
        self._environ = environ
        self._default = default

    def current_side(self) -> Side:
        side = _current_side.get()
        if side is not None:
            return side
        env = self._environ if self._environ is not None else os.environ
        raw = env.get(SIDE_ENV_VAR)
        if raw:
            side = Side.parse(raw)
            if not side.is_concrete:
                raise ConfigurationError(f"{SIDE_ENV_VAR} must name a concrete side, got '{raw}'")
            return side
        return self._default


DEFAULT_DETECTOR = ContextSideDetector()


@contextmanager
def side_scope(side: Union[str, Side]) -> Iterator[Side]:
    """Context manager: run the block as *side*.

    The side is stored in a ContextVar, so threads and asyncio tasks each see
    their own value.
    """
    resolved = Side.parse(side)
    if not resolved.is_concrete:
        raise ConfigurationError("side_scope() requires a concrete side (client or server)")
    tok = _current_side.set(resolved)
    try:
        yield resolved
    finally:
        _current_side.reset(tok)


def current_side() -> Side:
    """Return the side reported by the default detector."""
    return DEFAULT_DETECTOR.current_side()
