"""Error hierarchy for apphome.

Every error carries a human message plus optional context fields
(``path``, ``version``, ...). Causes are chained with ``raise ... from``
so the full story shows up in tracebacks.
"""

from __future__ import annotations


class AppHomeError(Exception):
    """Base class for all apphome errors."""

    def __init__(self, message: str, **fields: object):
        super().__init__(message)
        self.message = message
        self.fields = fields

    def __str__(self) -> str:
        if not self.fields:
            return self.message
        context = " ".join(f"{k}={v}" for k, v in self.fields.items())
        return f"{self.message} [{context}]"


class VersionParseError(AppHomeError, ValueError):
    """A string does not follow the semantic version grammar."""


class VersionGenerationError(AppHomeError):
    """A synthetic version could not be built from source control."""


class HomeError(AppHomeError):
    """The home directory could not be created."""


class LockError(AppHomeError):
    """The home preparation lock could not be acquired."""


class ConfigError(AppHomeError):
    """The home ``config.yaml`` exists but is not a usable mapping."""


class ExtractionError(AppHomeError):
    """An asset could not be extracted into the target directory."""


class ProvisioningError(AppHomeError):
    """Assets for the current version could not be restored."""


class CleanupError(AppHomeError):
    """Old asset versions could not be listed or removed."""
