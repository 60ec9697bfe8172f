# sided_ioc/decorators.py
from __future__ import annotations

from typing import Any, Optional, Union

from .constants import CONSTRUCTOR_FLAG, SIDED_META
from .sides import Side


def _func_of(obj: Any) -> Any:
    return obj.__func__ if isinstance(obj, (classmethod, staticmethod)) else obj


def sided(side: Union[str, Side] = Side.UNIVERSAL):
    """Reserve a constructor for *side*.

    Usually applied to ``__init__``; alternate constructors take the side via
    ``@constructor(side=...)`` instead.
    """
    resolved = Side.parse(side)

    def dec(obj):
        setattr(_func_of(obj), SIDED_META, resolved)
        return obj
    return dec


def constructor(obj=None, *, side: Optional[Union[str, Side]] = None):
    """Mark a classmethod as an alternate constructor for activation.

    Plain functions are turned into classmethods. ``side=None`` leaves the
    constructor untagged.
    """
    resolved = Side.parse(side) if side is not None else None

    def dec(o):
        if isinstance(o, staticmethod):
            raise TypeError("@constructor cannot be applied to a staticmethod")
        fn = _func_of(o)
        if getattr(fn, "__name__", None) == "__init__":
            if resolved is not None:
                setattr(fn, SIDED_META, resolved)
            return o
        setattr(fn, CONSTRUCTOR_FLAG, True)
        if resolved is not None:
            setattr(fn, SIDED_META, resolved)
        return o if isinstance(o, classmethod) else classmethod(o)
    return dec(obj) if obj is not None else dec


def client_constructor(obj):
    return constructor(obj, side=Side.CLIENT)


def server_constructor(obj):
    return constructor(obj, side=Side.SERVER)


def universal_constructor(obj):
    return constructor(obj, side=Side.UNIVERSAL)


def get_side(obj: Any) -> Optional[Side]:
    """Return the side stamped on a constructor, or ``None`` if untagged."""
    return getattr(_func_of(obj), SIDED_META, None)


def is_constructor(obj: Any) -> bool:
    return isinstance(obj, classmethod) and bool(getattr(obj.__func__, CONSTRUCTOR_FLAG, False))


__all__ = [
    "sided", "constructor",
    "client_constructor", "server_constructor", "universal_constructor",
    "get_side", "is_constructor",
    "SIDED_META", "CONSTRUCTOR_FLAG",
]
