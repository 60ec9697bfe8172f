"""Constructor selection.

Two entry points, one per activation path:

* :func:`find_constructor_for_values` scores every eligible constructor with a
  :class:`~sided_ioc.matching.ConstructorMatcher` and keeps the best one.
* :func:`find_constructor_for_types` looks for exactly one constructor whose
  parameters accept the given argument types.

On both paths a constructor tagged for the current side is *preferred*: it
wins outright, and two of them are an error. Constructors tagged for the
other side are only considered when the class has no other constructor.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from .analysis import ConstructorCandidate, discover_constructors
from .exceptions import (
    AmbiguousConstructorError,
    AmbiguousPreferredConstructorError,
    NoApplicableConstructorError,
    PreferredConstructorArgumentMismatchError,
)
from .matching import ConstructorMatcher, ParameterMap, try_create_parameter_map
from .sides import Side

_logger = logging.getLogger(__name__)


def _eligible_for(side: Side, target: Any) -> Tuple[ConstructorCandidate, ...]:
    # Constructors reserved for the other side only compete when nothing else can.
    declared = discover_constructors(target)
    candidates = tuple(c for c in declared if c.is_eligible(side)) or declared
    if sum(1 for c in candidates if c.is_preferred(side)) > 1:
        raise AmbiguousPreferredConstructorError(target, side)
    return candidates


def find_constructor_for_values(side: Side, target: Any, values: Sequence[Any]) -> ConstructorMatcher:
    """Choose the constructor for an immediate activation with concrete *values*.

    Raises:
        AmbiguousPreferredConstructorError: Two constructors are tagged for *side*.
        PreferredConstructorArgumentMismatchError: The constructor tagged for *side*
            cannot take all of *values*.
        NoApplicableConstructorError: No eligible constructor takes all of *values*.
    """
    best_length = -1
    best: Optional[ConstructorMatcher] = None
    seen_preferred = False

    for candidate in _eligible_for(side, target):
        matcher = ConstructorMatcher(candidate)
        preferred = candidate.is_preferred(side)
        length = matcher.match(values)

        if preferred:
            if length == -1:
                raise PreferredConstructorArgumentMismatchError(target, side, values)
            best_length, best = length, matcher
            seen_preferred = True
        elif not seen_preferred and best_length < length:
            best_length, best = length, matcher

    if best is None:
        raise NoApplicableConstructorError(target)
    _logger.debug(
        "Selected %s for %d value(s) on side %s (preferred=%s, score=%d)",
        best.candidate.display_name, len(values), side, seen_preferred, best_length,
    )
    return best


def _find_preferred(side: Side, target: Any, candidates: Sequence[ConstructorCandidate], argument_types: Sequence[Any]) -> Optional[Tuple[ConstructorCandidate, ParameterMap]]:
    found: Optional[Tuple[ConstructorCandidate, ParameterMap]] = None
    for candidate in candidates:
        if not candidate.is_preferred(side):
            continue
        mapping = try_create_parameter_map(candidate.parameters, argument_types)
        if mapping is None:
            raise PreferredConstructorArgumentMismatchError(target, side, argument_types)
        found = (candidate, mapping)
    return found


def _find_matching(target: Any, candidates: Sequence[ConstructorCandidate], argument_types: Sequence[Any]) -> Tuple[ConstructorCandidate, ParameterMap]:
    matches: List[Tuple[ConstructorCandidate, ParameterMap]] = []
    for candidate in candidates:
        mapping = try_create_parameter_map(candidate.parameters, argument_types)
        if mapping is not None:
            matches.append((candidate, mapping))
    if not matches:
        raise NoApplicableConstructorError(target)
    if len(matches) > 1:
        raise AmbiguousConstructorError(target, [c.display_name for c, _ in matches])
    return matches[0]


def find_constructor_for_types(side: Side, target: Any, argument_types: Sequence[Any]) -> Tuple[ConstructorCandidate, ParameterMap]:
    """Choose the constructor and parameter map for a compiled factory.

    Raises:
        AmbiguousPreferredConstructorError: Two constructors are tagged for *side*.
        PreferredConstructorArgumentMismatchError: The constructor tagged for *side*
            cannot take *argument_types*.
        NoApplicableConstructorError: No eligible constructor takes *argument_types*.
        AmbiguousConstructorError: More than one eligible constructor takes them.
    """
    candidates = _eligible_for(side, target)
    chosen = _find_preferred(side, target, candidates, argument_types)
    if chosen is None:
        chosen = _find_matching(target, candidates, argument_types)
    _logger.debug(
        "Selected %s for argument types (%s) on side %s; parameter map %s",
        chosen[0].display_name,
        ", ".join(getattr(t, "__name__", str(t)) for t in argument_types),
        side,
        chosen[1],
    )
    return chosen
