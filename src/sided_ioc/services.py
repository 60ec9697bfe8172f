"""A small service collection and provider built on the activator.

:class:`ServiceCollection` records registrations; :meth:`ServiceCollection.build_provider`
turns them into a :class:`ServiceProvider` bound to one side. Class
registrations are built with the sided activator, so ``@sided`` and
``@constructor`` tags choose the constructor for the provider's side.
"""

import importlib
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Generic, Iterator, Optional, Tuple, TypeVar, Union

from .activator import create_factory, create_instance, get_service_or_create_instance
from .constants import LOGGER
from .exceptions import ConfigurationError, ServiceNotRegisteredError
from .factory import CompiledFactory
from .resolver import ServiceResolver
from .sides import DEFAULT_DETECTOR, FixedSideDetector, Side, SideDetector

KeyT = Union[str, type, Any]
T = TypeVar("T")


class Lifetime(str, Enum):
    SINGLETON = "singleton"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class ServiceDescriptor:
    """One registration. Exactly one of *implementation*, *instance* or *factory* is set."""
    key: KeyT
    lifetime: Lifetime
    implementation: Optional[type] = None
    instance: Any = None
    factory: Optional[Callable[["ServiceProvider"], Any]] = None


def _key_name(key: KeyT) -> str:
    return getattr(key, "__name__", str(key))


def _import_type(type_name: str) -> type:
    if ":" in type_name:
        module_name, _, qualname = type_name.partition(":")
    else:
        module_name, _, qualname = type_name.rpartition(".")
    if not module_name or not qualname:
        raise ConfigurationError(f"Type name '{type_name}' must be 'module.Class' or 'module:Class'")
    try:
        obj: Any = importlib.import_module(module_name)
        for part in qualname.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot import type '{type_name}': {e}") from e
    if not isinstance(obj, type):
        raise ConfigurationError(f"'{type_name}' does not name a class")
    return obj


class TypeNameFactory(Generic[T]):
    """Creates services of a base type from a class named at runtime.

    Registered by :meth:`ServiceCollection.add_type_name_factory` under
    ``TypeNameFactory[base]``. The named class is resolved from the provider
    when registered there, otherwise activated for the provider's side.
    """

    def __init__(self, provider: "ServiceProvider", base: type) -> None:
        self._provider = provider
        self._base = base

    def create(self, type_name: str) -> T:
        instance = get_service_or_create_instance(self._provider, _import_type(type_name))
        if not isinstance(instance, self._base):
            raise TypeError(f"'{type_name}' produced '{type(instance).__name__}', not '{self._base.__name__}'")
        return instance


class ServiceCollection:
    """Ordered set of service registrations, one per key; later registrations replace earlier ones."""

    def __init__(self) -> None:
        self._descriptors: Dict[KeyT, ServiceDescriptor] = {}

    def _describe(self, key: KeyT, lifetime: Lifetime, implementation: Optional[type], instance: Any, factory: Any) -> "ServiceCollection":
        given = sum(x is not None for x in (implementation, instance, factory))
        if given > 1:
            raise ConfigurationError(f"Register '{_key_name(key)}' with one of implementation, instance or factory")
        if given == 0:
            if not isinstance(key, type):
                raise ConfigurationError(f"Key '{_key_name(key)}' is not a class; pass an implementation, instance or factory")
            implementation = key
        return self.add(ServiceDescriptor(key, lifetime, implementation, instance, factory))

    def add(self, descriptor: ServiceDescriptor) -> "ServiceCollection":
        self._descriptors[descriptor.key] = descriptor
        return self

    def add_singleton(self, key: KeyT, implementation: Optional[type] = None, *, instance: Any = None, factory: Optional[Callable[["ServiceProvider"], Any]] = None) -> "ServiceCollection":
        return self._describe(key, Lifetime.SINGLETON, implementation, instance, factory)

    def add_transient(self, key: KeyT, implementation: Optional[type] = None, *, factory: Optional[Callable[["ServiceProvider"], Any]] = None) -> "ServiceCollection":
        return self._describe(key, Lifetime.TRANSIENT, implementation, None, factory)

    def add_instance(self, key: KeyT, instance: Any) -> "ServiceCollection":
        return self.add_singleton(key, instance=instance)

    def get(self, key: KeyT) -> Optional[ServiceDescriptor]:
        return self._descriptors.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(list(self._descriptors.values()))

    def decorate(self, key: KeyT, decorator: type, *, side: Optional[Union[str, Side]] = None) -> "ServiceCollection":
        """Wrap the service registered for *key* in *decorator*.

        *decorator* must have a constructor taking the wrapped service; its
        other parameters are resolved from the provider. The registration keeps
        its lifetime. The decorator's factory is compiled for *side*, or for the
        provider's side on first use.

        Raises:
            ServiceNotRegisteredError: If nothing is registered for *key*.
        """
        wrapped = self._descriptors.get(key)
        if wrapped is None:
            raise ServiceNotRegisteredError(key)

        compiled: Dict[Side, CompiledFactory] = {}
        if side is not None:
            s = Side.parse(side)
            compiled[s] = create_factory(s, decorator, (key,))

        def build(provider: "ServiceProvider") -> Any:
            factory = compiled.get(provider.side)
            if factory is None:
                factory = compiled.setdefault(provider.side, create_factory(provider.side, decorator, (key,)))
            return factory(provider, [provider._instantiate(wrapped)])

        LOGGER.debug("Decorating %s with %s", _key_name(key), decorator.__name__)
        return self.add(replace(wrapped, implementation=None, instance=None, factory=build))

    def add_factory(self, key: KeyT) -> "ServiceCollection":
        """Register ``Callable[[], key]``: a zero-argument callable returning the required service."""
        return self.add_transient(Callable[[], key], factory=lambda provider: (lambda: provider.get_required_service(key)))

    def add_type_name_factory(self, base: type) -> "ServiceCollection":
        """Register ``TypeNameFactory[base]``, which creates *base* subclasses from their dotted names."""
        return self.add_transient(TypeNameFactory[base], factory=lambda provider: TypeNameFactory(provider, base))

    def build_provider(self, side: Optional[Union[str, Side]] = None) -> "ServiceProvider":
        resolved = Side.parse(side) if side is not None else DEFAULT_DETECTOR.current_side()
        provider = ServiceProvider(self._descriptors, resolved)
        LOGGER.debug("Service provider built for side %s with %d services", resolved, len(self._descriptors))
        return provider


class ServiceProvider:
    """Resolves services from a snapshot of a :class:`ServiceCollection`.

    The provider answers for itself (``ServiceProvider``, ``ServiceResolver``)
    and for ``SideDetector`` with a detector fixed to its side.
    """

    def __init__(self, descriptors: Dict[KeyT, ServiceDescriptor], side: Side) -> None:
        self._descriptors = dict(descriptors)
        self.side = side
        self._detector = FixedSideDetector(side)
        self._singletons: Dict[KeyT, Any] = {}
        self._lock = threading.RLock()

    def _instantiate(self, descriptor: ServiceDescriptor) -> Any:
        if descriptor.instance is not None:
            return descriptor.instance
        if descriptor.factory is not None:
            return descriptor.factory(self)
        impl = descriptor.implementation
        if impl is descriptor.key:
            return create_instance(self, impl, side=self.side)
        return get_service_or_create_instance(self, impl)

    def get_service(self, key: KeyT) -> Any:
        if key is ServiceProvider or key is ServiceResolver:
            return self
        if key is SideDetector:
            return self._detector
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            return None
        if descriptor.lifetime is Lifetime.TRANSIENT:
            return self._instantiate(descriptor)
        with self._lock:
            if key not in self._singletons:
                self._singletons[key] = self._instantiate(descriptor)
            return self._singletons[key]

    def get_required_service(self, key: KeyT) -> Any:
        service = self.get_service(key)
        if service is None:
            raise ServiceNotRegisteredError(key)
        return service

    def try_resolve(self, key: KeyT) -> Tuple[bool, Any]:
        service = self.get_service(key)
        return service is not None, service

    def __contains__(self, key: object) -> bool:
        return key in self._descriptors
