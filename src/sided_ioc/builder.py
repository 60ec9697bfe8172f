"""Immediate construction from a matched constructor."""

import logging
from typing import Any

from .matching import ConstructorMatcher
from .resolver import ServiceResolver, resolve_parameter

_logger = logging.getLogger(__name__)


def build_instance(matcher: ConstructorMatcher, provider: ServiceResolver) -> Any:
    """Fill the parameters *matcher* left unbound from *provider* and call the constructor.

    Exceptions raised by the constructor itself propagate unchanged.
    """
    candidate = matcher.candidate
    values = list(matcher.values)
    for index, param in enumerate(matcher.parameters):
        if matcher.is_set[index]:
            continue
        values[index] = resolve_parameter(provider, param, candidate.target)

    try:
        return candidate.invoke(values)
    except Exception as e:
        _logger.debug("%s raised %s: %s", candidate.display_name, e.__class__.__name__, e)
        raise
