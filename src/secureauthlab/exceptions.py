"""
SecureAuth Lab Exceptions
Error types raised by the simulator and its configuration layer.
"""


class SecureAuthLabError(Exception):
    """Base class for SecureAuth Lab errors."""
    pass


class ConfigurationError(SecureAuthLabError, ValueError):
    """Raised when a defense/pacing configuration or secret is rejected before a run."""
    pass


class UnsupportedCharacterError(SecureAuthLabError):
    """
    Describes a secret character outside the supported character classes.

    The engine never raises this to callers; its message becomes the reason
    of a failed SimulationResult.
    """

    def __init__(self, position: int, discovered: str = ""):
        self.position = position
        self.discovered = discovered
        super().__init__(
            f"Password contains characters outside the supported character set "
            f"(position {position + 1}). Secret outside supported character set."
        )


class SimulationStateError(SecureAuthLabError, RuntimeError):
    """Raised when a run handle is used in a state that does not allow it."""
    pass
