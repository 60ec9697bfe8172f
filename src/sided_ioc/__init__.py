# sided_ioc/__init__.py
try:
    from ._version import __version__
except Exception:
    __version__ = "0.0.0"

from .sides import Side, SideDetector, ContextSideDetector, FixedSideDetector, side_scope, current_side
from .decorators import sided, constructor, client_constructor, server_constructor, universal_constructor
from .resolver import ServiceResolver
from .factory import CompiledFactory
from .activator import create_instance, create_factory, get_service_or_create_instance, create_sided_instance
from .services import ServiceCollection, ServiceProvider, ServiceDescriptor, Lifetime, TypeNameFactory
from .exceptions import (
    SidedIocError,
    ActivationError,
    AmbiguousPreferredConstructorError,
    PreferredConstructorArgumentMismatchError,
    NoApplicableConstructorError,
    AmbiguousConstructorError,
    UnresolvableParameterError,
    ArgumentTypeMismatchError,
    ArgumentCountError,
    ServiceNotRegisteredError,
    ConfigurationError,
)

__all__ = [
    "__version__",
    "Side",
    "SideDetector",
    "ContextSideDetector",
    "FixedSideDetector",
    "side_scope",
    "current_side",
    "sided",
    "constructor",
    "client_constructor",
    "server_constructor",
    "universal_constructor",
    "ServiceResolver",
    "CompiledFactory",
    "create_instance",
    "create_factory",
    "get_service_or_create_instance",
    "create_sided_instance",
    "ServiceCollection",
    "ServiceProvider",
    "ServiceDescriptor",
    "Lifetime",
    "TypeNameFactory",
    "SidedIocError",
    "ActivationError",
    "AmbiguousPreferredConstructorError",
    "PreferredConstructorArgumentMismatchError",
    "NoApplicableConstructorError",
    "AmbiguousConstructorError",
    "UnresolvableParameterError",
    "ArgumentTypeMismatchError",
    "ArgumentCountError",
    "ServiceNotRegisteredError",
    "ConfigurationError",
]
