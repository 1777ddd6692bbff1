# File: confload/errors.py
# Purpose: Error taxonomy for load-test operations


class LoadTestError(Exception):
    """Base class for every error the menu recovers from"""


class PreconditionError(LoadTestError, RuntimeError):
    """A required binary or installer is absent"""


class InvalidInputError(LoadTestError, ValueError):
    """Operator input could not be used; only the current action is aborted"""


class PersistenceError(LoadTestError, OSError):
    """Persisted state could not be read or written"""


class ConfigError(LoadTestError, ValueError):
    """Configuration file missing or malformed"""


class InstallerError(LoadTestError, RuntimeError):
    """Download or installer command failed"""
