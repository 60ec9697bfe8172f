"""Constructor discovery and parameter analysis.

Turns a class into the ordered tuple of :class:`ConstructorCandidate` objects
the selector works on, and provides the assignability checks shared by the
value matcher, the type mapper and the compiled factories.
"""

import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar, Union, get_args, get_origin, Annotated

from .decorators import get_side, is_constructor
from .sides import Side

_EMPTY = inspect.Parameter.empty
_UNION_TYPES: Tuple[Any, ...] = (Union, types.UnionType) if hasattr(types, "UnionType") else (Union,)


@dataclass(frozen=True)
class ParameterInfo:
    """One constructor parameter.

    Attributes:
        name: Parameter name.
        annotation: Declared type used for assignability checks (``Any`` when unannotated).
        key: Key handed to the service resolver. The unwrapped type for
            ``Optional[T]``/``Annotated[T, ...]``, the parameter name when unannotated.
        kind: The :class:`inspect.Parameter` kind.
        has_default: Whether a default value is declared.
        default: The declared default, or ``None``.
    """
    name: str
    annotation: Any
    key: Any
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD
    has_default: bool = False
    default: Any = None

    @property
    def keyword_only(self) -> bool:
        return self.kind is inspect.Parameter.KEYWORD_ONLY


@dataclass(frozen=True)
class ConstructorCandidate:
    """A public constructor of *target*: its ``__init__`` (or ``__new__``) or a ``@constructor`` classmethod."""
    target: type
    name: str
    parameters: Tuple[ParameterInfo, ...]
    side: Optional[Side] = None

    @property
    def display_name(self) -> str:
        return f"{self.target.__qualname__}.{self.name}"

    def is_preferred(self, side: Side) -> bool:
        return self.side is not None and self.side.is_concrete and self.side is side

    def is_eligible(self, side: Side) -> bool:
        """Untagged and universal constructors are eligible everywhere; sided ones only on their side."""
        return self.side is None or not self.side.is_concrete or self.side is side

    def invoke(self, values: Sequence[Any]) -> Any:
        """Call the constructor with one value per parameter, in parameter order."""
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for param, value in zip(self.parameters, values):
            if param.keyword_only:
                kwargs[param.name] = value
            else:
                args.append(value)
        if self.name == "__init__":
            return self.target(*args, **kwargs)
        return getattr(self.target, self.name)(*args, **kwargs)


def _unwrap_annotated(ann: Any) -> Any:
    if get_origin(ann) is Annotated:
        args = get_args(ann)
        return args[0] if args else Any
    return ann


def _resolve_key(ann: Any, name: str) -> Any:
    if ann is _EMPTY:
        return name
    base = _unwrap_annotated(ann)
    if get_origin(base) in _UNION_TYPES:
        args = [a for a in get_args(base) if a is not type(None)]
        if len(args) == 1:
            base = _unwrap_annotated(args[0])
    return base


def _type_hints(fn: Callable[..., Any]) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(fn, include_extras=True)
    except Exception:
        return dict(getattr(fn, "__annotations__", {}) or {})


def analyze_parameters(fn: Callable[..., Any], *, skip_first: bool) -> Optional[Tuple[ParameterInfo, ...]]:
    """Describe the parameters of *fn*; ``None`` if its signature cannot be read."""
    try:
        sig = inspect.signature(fn)
    except (ValueError, TypeError):
        return None

    hints = _type_hints(fn)
    out: List[ParameterInfo] = []
    params = list(sig.parameters.values())
    if skip_first and params:
        params = params[1:]

    for param in params:
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        raw = hints.get(param.name, param.annotation)
        annotation = Any if raw is _EMPTY else _unwrap_annotated(raw)
        out.append(
            ParameterInfo(
                name=param.name,
                annotation=annotation,
                key=_resolve_key(raw, param.name),
                kind=param.kind,
                has_default=param.default is not _EMPTY,
                default=None if param.default is _EMPTY else param.default,
            )
        )
    return tuple(out)


def _init_candidate(cls: type) -> Optional[ConstructorCandidate]:
    init = cls.__init__
    if init is not object.__init__:
        fn = init
    elif cls.__new__ is not object.__new__:
        # NamedTuple and __new__-only classes carry their signature on __new__.
        fn = cls.__new__
    else:
        return ConstructorCandidate(target=cls, name="__init__", parameters=(), side=get_side(init))
    params = analyze_parameters(fn, skip_first=True)
    if params is None:
        return None
    return ConstructorCandidate(target=cls, name="__init__", parameters=params, side=get_side(fn))


def discover_constructors(cls: Any) -> Tuple[ConstructorCandidate, ...]:
    """Return the constructors of *cls* in declaration order.

    ``__init__`` (declared or inherited) comes first unless it is declared
    after an alternate constructor in the class body. When only ``object.__init__``
    is inherited, the signature is read from ``__new__``; an unreadable one
    yields no ``__init__`` candidate. Abstract classes and non-classes have no
    constructors.
    """
    if not inspect.isclass(cls) or inspect.isabstract(cls):
        return ()

    found: List[ConstructorCandidate] = []
    init = _init_candidate(cls)
    if init is not None and "__init__" not in vars(cls):
        found.append(init)

    for name, member in vars(cls).items():
        if name == "__init__":
            if init is not None:
                found.append(init)
            continue
        if name.startswith("_") or not is_constructor(member):
            continue
        params = analyze_parameters(member.__func__, skip_first=True)
        if params is None:
            continue
        found.append(ConstructorCandidate(target=cls, name=name, parameters=params, side=get_side(member)))
    return tuple(found)


def accepts_none(annotation: Any) -> bool:
    if annotation is Any or annotation is None or annotation is type(None) or isinstance(annotation, TypeVar):
        return True
    if get_origin(annotation) in _UNION_TYPES:
        return any(accepts_none(a) for a in get_args(annotation))
    return False


def is_assignable_value(annotation: Any, value: Any) -> bool:
    """Whether *value* may be passed to a parameter declared as *annotation*."""
    if annotation is Any or isinstance(annotation, TypeVar):
        return True
    if value is None:
        return accepts_none(annotation)
    annotation = _unwrap_annotated(annotation)
    origin = get_origin(annotation)
    if origin in _UNION_TYPES:
        return any(is_assignable_value(a, value) for a in get_args(annotation))
    if origin is not None:
        annotation = origin
    if not isinstance(annotation, type):
        return False
    try:
        return isinstance(value, annotation)
    except TypeError:
        return False


def is_assignable_type(annotation: Any, given: Any) -> bool:
    """Whether a value of type *given* may be passed to a parameter declared as *annotation*."""
    if annotation is Any or isinstance(annotation, TypeVar):
        return True
    if given is None or given is type(None):
        return accepts_none(annotation)
    given = _unwrap_annotated(given)
    if get_origin(given) in _UNION_TYPES:
        return all(is_assignable_type(annotation, g) for g in get_args(given))
    annotation = _unwrap_annotated(annotation)
    origin = get_origin(annotation)
    if origin in _UNION_TYPES:
        return any(is_assignable_type(a, given) for a in get_args(annotation))
    if origin is not None:
        annotation = origin
    given_origin = get_origin(given)
    if given_origin is not None:
        given = given_origin
    if not isinstance(annotation, type) or not isinstance(given, type):
        return False
    try:
        return issubclass(given, annotation)
    except TypeError:
        return False


def is_checkable(annotation: Any) -> bool:
    """Whether values can be checked against *annotation* at runtime with ``isinstance``."""
    if annotation is Any or isinstance(annotation, TypeVar):
        return False
    annotation = _unwrap_annotated(annotation)
    origin = get_origin(annotation)
    if origin in _UNION_TYPES:
        return all(a is type(None) or is_checkable(a) for a in get_args(annotation))
    base = origin if origin is not None else annotation
    if not isinstance(base, type):
        return False
    if getattr(base, "_is_protocol", False) and not getattr(base, "_is_runtime_protocol", False):
        return False
    return True
