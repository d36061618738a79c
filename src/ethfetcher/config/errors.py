"""Errors raised while reading ethfetcher settings from the environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """An environment variable holds a value ethfetcher cannot use."""


class MissingConfigurationError(ConfigurationError):
    """One or more required environment variables are unset or blank.

    ``names`` lists the offending variables in sorted order so callers can
    report them without parsing the message.
    """

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")
