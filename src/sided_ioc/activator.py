"""Public activation entry points.

``create_instance`` builds an object right away from concrete values;
``create_factory`` prepares a :class:`~sided_ioc.factory.CompiledFactory`
for repeated activation when only the argument types are known.
"""

from typing import Any, Optional, Sequence, Type, TypeVar, Union

from .builder import build_instance
from .constants import LOGGER
from .factory import CompiledFactory, compile_factory
from .resolver import ServiceResolver
from .selection import find_constructor_for_types, find_constructor_for_values
from .sides import DEFAULT_DETECTOR, Side, SideDetector

T = TypeVar("T")


def _detect_side(provider: ServiceResolver, side: Optional[Union[str, Side]], detector: Optional[SideDetector]) -> Side:
    if side is not None:
        return Side.parse(side)
    if detector is None:
        registered = provider.get_service(SideDetector)
        detector = registered if registered is not None else DEFAULT_DETECTOR
    return Side.parse(detector.current_side())


def create_instance(
    provider: ServiceResolver,
    target: Type[T],
    *values: Any,
    side: Optional[Union[str, Side]] = None,
    detector: Optional[SideDetector] = None,
) -> T:
    """Instantiate *target* with *values*, resolving the remaining parameters from *provider*.

    The current side comes from *side*, else *detector*, else the
    :class:`~sided_ioc.sides.SideDetector` registered in *provider*, else the
    default context detector. It is read once per call.

    Raises:
        ActivationError: If no single constructor can be selected, or a
            parameter cannot be resolved. Exceptions raised by the constructor
            itself propagate unchanged.
    """
    current = _detect_side(provider, side, detector)
    matcher = find_constructor_for_values(current, target, values)
    return build_instance(matcher, provider)


def create_factory(side: Union[str, Side], target: type, argument_types: Sequence[Any] = ()) -> CompiledFactory:
    """Prepare a reusable factory for *target* on *side*.

    The returned factory is called as ``factory(provider, arguments)`` where
    ``arguments[i]`` is an instance of ``argument_types[i]``. Each call
    resolves the unbound parameters from the given provider again.

    Raises:
        ActivationError: If no single constructor accepts *argument_types*.
    """
    candidate, parameter_map = find_constructor_for_types(Side.parse(side), target, tuple(argument_types))
    return compile_factory(candidate, parameter_map)


def get_service_or_create_instance(provider: ServiceResolver, target: Type[T]) -> T:
    """Return the service registered for *target*, or build one with no explicit values."""
    service = provider.get_service(target)
    if service is not None:
        return service
    LOGGER.debug("No service registered for %s; creating an instance", getattr(target, "__name__", target))
    return create_instance(provider, target)


def create_sided_instance(provider: ServiceResolver, target: Type[T], *values: Any) -> T:
    """Like :func:`create_instance`, checking the result is a *target*."""
    instance = create_instance(provider, target, *values)
    if not isinstance(instance, target):
        raise TypeError(f"Activating '{target.__name__}' produced '{type(instance).__name__}'")
    return instance
