"""Exception hierarchy for unlockcal.

Malformed feed content never raises; it is counted in ``ParseResult``. These
types cover failures outside the parsing core.
"""


class UnlockCalError(Exception):
    """Base exception for all unlockcal errors."""


class ConfigError(UnlockCalError):
    """Configuration file could not be used.

    Raised when:
    - The file is neither valid YAML nor valid JSON
    - The top level of the file is not a mapping
    """
