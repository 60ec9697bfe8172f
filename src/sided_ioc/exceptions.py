"""Exception hierarchy for sided-ioc.

All package-specific exceptions inherit from :class:`SidedIocError`, making it
easy to catch any sided-ioc error with a single ``except SidedIocError`` clause.
Selection and construction failures share the :class:`ActivationError` base.
"""

from typing import Any, Iterable, Sequence


def _name(obj: Any) -> str:
    return getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or str(obj)


class SidedIocError(Exception):
    """Base exception for all sided-ioc errors."""

    pass


class ConfigurationError(SidedIocError):
    """Raised for configuration problems (unknown side names in code or environment)."""

    def __init__(self, msg: str):
        super().__init__(msg)


class ServiceNotRegisteredError(SidedIocError):
    """Raised when a required service is not registered with the provider.

    Attributes:
        key: The service key that was not found.
    """

    def __init__(self, key: Any):
        super().__init__(f"No service for type '{_name(key)}' has been registered.")
        self.key = key


class ActivationError(SidedIocError):
    """Base exception for constructor selection and instance construction failures.

    Attributes:
        target: The class that was being activated.
    """

    def __init__(self, target: Any, msg: str):
        super().__init__(msg)
        self.target = target


class AmbiguousPreferredConstructorError(ActivationError):
    """Raised when more than one constructor is tagged for the requested side."""

    def __init__(self, target: Any, side: Any):
        super().__init__(
            target,
            f"Multiple constructors of type '{_name(target)}' are marked as sided constructors for side '{side}'.",
        )
        self.side = side


class PreferredConstructorArgumentMismatchError(ActivationError):
    """Raised when the constructor tagged for the requested side cannot take the supplied arguments.

    Attributes:
        side: The side the constructor is tagged for.
        arguments: The supplied values (immediate path) or argument types (factory path).
    """

    def __init__(self, target: Any, side: Any, arguments: Sequence[Any]):
        super().__init__(
            target,
            f"The sided constructor of type '{_name(target)}' for side '{side}' "
            f"does not accept all given arguments.",
        )
        self.side = side
        self.arguments = tuple(arguments)


class NoApplicableConstructorError(ActivationError):
    """Raised when no constructor of the target accepts the supplied inputs."""

    def __init__(self, target: Any):
        super().__init__(
            target,
            f"A suitable constructor for type '{_name(target)}' could not be located. "
            "Ensure the type is concrete and services are registered for all parameters of a public constructor.",
        )


class AmbiguousConstructorError(ActivationError):
    """Raised when several non-preferred constructors accept the supplied argument types.

    Attributes:
        candidates: Names of the constructors that matched.
    """

    def __init__(self, target: Any, candidates: Iterable[str]):
        self.candidates = tuple(candidates)
        super().__init__(
            target,
            f"Multiple constructors accepting all given argument types have been found in type "
            f"'{_name(target)}': {', '.join(self.candidates)}. There should only be one applicable constructor.",
        )


class UnresolvableParameterError(ActivationError):
    """Raised when an unbound parameter cannot be resolved and has no default value.

    Attributes:
        parameter: The parameter name.
        key: The service key that was looked up.
    """

    def __init__(self, target: Any, parameter: str, key: Any):
        super().__init__(
            target,
            f"Unable to resolve service for type '{_name(key)}' (parameter '{parameter}') "
            f"while attempting to activate '{_name(target)}'.",
        )
        self.parameter = parameter
        self.key = key


class ArgumentTypeMismatchError(ActivationError, TypeError):
    """Raised by a compiled factory when a value does not match its parameter's declared type."""

    def __init__(self, target: Any, parameter: str, expected: Any, value: Any):
        super().__init__(
            target,
            f"Cannot pass value of type '{_name(type(value))}' to parameter '{parameter}' "
            f"of '{_name(target)}'; expected '{_name(expected)}'.",
        )
        self.parameter = parameter
        self.expected = expected
        self.value = value


class ArgumentCountError(ActivationError, IndexError):
    """Raised by a compiled factory when the argument array is shorter than its signature."""

    def __init__(self, target: Any, expected: int, received: int):
        super().__init__(
            target,
            f"Factory for '{_name(target)}' expects {expected} argument(s) but received {received}.",
        )
        self.expected = expected
        self.received = received
