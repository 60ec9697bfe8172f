"""The service resolver contract consumed by the activator."""

import logging
from typing import Any, Protocol, runtime_checkable

from .analysis import ParameterInfo
from .exceptions import UnresolvableParameterError

_logger = logging.getLogger(__name__)


@runtime_checkable
class ServiceResolver(Protocol):
    """Anything that can look a service up by key.

    ``get_service`` returns ``None`` for unregistered keys instead of raising,
    and must be safe to call from several threads at once.
    """

    def get_service(self, key: Any) -> Any: ...


def resolve_parameter(provider: ServiceResolver, param: ParameterInfo, target: Any) -> Any:
    """Resolve one unbound parameter through *provider*, falling back to its default.

    Raises:
        UnresolvableParameterError: Nothing is registered and no default is declared.
    """
    service = provider.get_service(param.key)
    if service is not None:
        return service
    if param.has_default:
        _logger.debug("No service for %r; using default of %s.%s", param.key, getattr(target, "__name__", target), param.name)
        return param.default
    raise UnresolvableParameterError(target, param.name, param.key)
