"""Exceptions raised by the init pipeline.

Every stage failure is one of these; the CLI turns them into exit code 1.
"""


class ChaincodeCliError(Exception):
    """Base class for all pipeline failures."""


class ProbeIOFailure(ChaincodeCliError):
    """A filesystem error other than absence occurred while probing a path."""


class SubprocessFailure(ChaincodeCliError):
    """The interactive manifest creation tool wrote to stderr or exited non-zero."""


class CorruptManifest(ChaincodeCliError):
    """The manifest could not be parsed or has a section of the wrong type."""


class DependencyResolutionFailure(ChaincodeCliError):
    """At least one latest-version lookup failed."""

    def __init__(self, message: str, failed: dict[str, BaseException] | None = None):
        super().__init__(message)
        self.failed = failed or {}


class PersistenceFailure(ChaincodeCliError):
    """Writing the manifest to disk failed."""


class ConfigurationError(ChaincodeCliError):
    """The settings file could not be parsed."""
