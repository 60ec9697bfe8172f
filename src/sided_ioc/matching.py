"""Parameter matching for constructor selection.

:class:`ConstructorMatcher` scores a constructor against concrete values
(immediate activation); :func:`try_create_parameter_map` maps argument types
onto parameters (compiled factories).
"""

from typing import Any, List, Optional, Sequence, Tuple

from .analysis import ConstructorCandidate, ParameterInfo, is_assignable_type, is_assignable_value

ParameterMap = Tuple[Optional[int], ...]


class ConstructorMatcher:
    """Binds explicit values onto one constructor's parameters.

    The matcher keeps the values it placed, so the same instance is later
    handed to :func:`~sided_ioc.builder.build_instance`.
    """

    def __init__(self, candidate: ConstructorCandidate) -> None:
        self.candidate = candidate
        self.parameters = candidate.parameters
        self.values: List[Any] = [None] * len(self.parameters)
        self.is_set: List[bool] = [False] * len(self.parameters)

    def match(self, given: Sequence[Any]) -> int:
        """Place *given* onto the parameters and score the fit.

        Each value goes to the leftmost unbound parameter that accepts it.
        Returns ``-1`` if some value fits nowhere, otherwise the length of the
        prefix of values that landed on their own position while every
        earlier parameter was already bound.
        """
        apply_start = 0
        exact_length = 0
        for given_index, value in enumerate(given):
            matched = False
            for apply_index in range(apply_start, len(self.parameters)):
                if self.is_set[apply_index] or not is_assignable_value(self.parameters[apply_index].annotation, value):
                    continue
                matched = True
                self.is_set[apply_index] = True
                self.values[apply_index] = value
                if apply_index == apply_start:
                    apply_start += 1
                    if apply_index == given_index:
                        exact_length = apply_index + 1
                break
            if not matched:
                return -1
        return exact_length

    def __repr__(self) -> str:
        return f"ConstructorMatcher({self.candidate.display_name})"


def try_create_parameter_map(parameters: Sequence[ParameterInfo], argument_types: Sequence[Any]) -> Optional[ParameterMap]:
    """Assign each argument slot to the first free parameter accepting its type.

    Returns ``None`` when some argument type has no free compatible parameter.
    """
    mapping: List[Optional[int]] = [None] * len(parameters)
    for slot, given in enumerate(argument_types):
        for index, param in enumerate(parameters):
            if mapping[index] is not None:
                continue
            if is_assignable_type(param.annotation, given):
                mapping[index] = slot
                break
        else:
            return None
    return tuple(mapping)
