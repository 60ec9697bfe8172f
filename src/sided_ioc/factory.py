"""Compiled factories for repeated activation.

:func:`compile_factory` binds a constructor and its parameter map once and
returns a :class:`CompiledFactory`, a callable ``(provider, arguments) ->
instance`` that never re-runs constructor selection. Each parameter gets its
own accessor closure, built at compile time and run at call time.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Tuple

from .analysis import ConstructorCandidate, ParameterInfo, is_assignable_value, is_checkable
from .exceptions import ArgumentCountError, ArgumentTypeMismatchError
from .matching import ParameterMap
from .resolver import ServiceResolver, resolve_parameter

_logger = logging.getLogger(__name__)

Accessor = Callable[[ServiceResolver, Sequence[Any]], Any]


@dataclass(frozen=True)
class CompiledFactory:
    """A reusable creation procedure for one constructor and one argument signature.

    Attributes:
        candidate: The constructor the factory calls.
        parameter_map: For each constructor parameter, the argument slot that
            feeds it, or ``None`` when it is resolved from the provider.
    """
    candidate: ConstructorCandidate
    parameter_map: ParameterMap
    accessors: Tuple[Accessor, ...] = field(repr=False, compare=False, default=())

    @property
    def arity(self) -> int:
        """Number of explicit arguments the factory expects."""
        return max((slot + 1 for slot in self.parameter_map if slot is not None), default=0)

    def __call__(self, provider: ServiceResolver, arguments: Sequence[Any] = ()) -> Any:
        expected = self.arity
        if len(arguments) < expected:
            raise ArgumentCountError(self.candidate.target, expected, len(arguments))
        return self.candidate.invoke([accessor(provider, arguments) for accessor in self.accessors])


def _compile_parameter(target: type, param: ParameterInfo, slot: Optional[int]) -> Accessor:
    fetch: Accessor
    if slot is not None:
        def fetch(provider: ServiceResolver, arguments: Sequence[Any]) -> Any:
            return arguments[slot]
    else:
        def fetch(provider: ServiceResolver, arguments: Sequence[Any]) -> Any:
            return resolve_parameter(provider, param, target)

    checked = is_checkable(param.annotation)
    if not param.has_default and not checked:
        return fetch

    def accessor(provider: ServiceResolver, arguments: Sequence[Any]) -> Any:
        value = fetch(provider, arguments)
        if param.has_default and (value is None or value is param.default):
            # Declared defaults are taken as-is; dataclass factories use a sentinel here.
            return param.default
        if checked and value is not None and not is_assignable_value(param.annotation, value):
            raise ArgumentTypeMismatchError(target, param.name, param.annotation, value)
        return value

    return accessor


def compile_factory(candidate: ConstructorCandidate, parameter_map: ParameterMap) -> CompiledFactory:
    """Build the :class:`CompiledFactory` for *candidate* fed according to *parameter_map*."""
    accessors = tuple(
        _compile_parameter(candidate.target, param, slot)
        for param, slot in zip(candidate.parameters, parameter_map)
    )
    _logger.debug("Compiled factory for %s with parameter map %s", candidate.display_name, parameter_map)
    return CompiledFactory(candidate=candidate, parameter_map=tuple(parameter_map), accessors=accessors)
