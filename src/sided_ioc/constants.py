"""Constants used throughout the sided-ioc package.

This module defines the internal attribute names stamped onto decorated
constructors, the package logger, and the configuration variable names.
"""

import logging

LOGGER_NAME: str = "sided_ioc"
"""Default logger name for the sided-ioc package."""

LOGGER: logging.Logger = logging.getLogger(LOGGER_NAME)
"""Pre-configured logger instance for sided-ioc internal diagnostics."""

SIDED_META: str = "_sided_side"
"""Attribute name storing the :class:`~sided_ioc.sides.Side` a constructor is reserved for."""

CONSTRUCTOR_FLAG: str = "_sided_constructor"
"""Attribute name marking a classmethod as an alternate constructor."""

SIDE_ENV_VAR: str = "SIDED_IOC_SIDE"
"""Environment variable consulted when no side has been set for the current context."""
