"""Public exceptions for httpbridge."""


class BridgeError(Exception):
    """Base exception for all httpbridge errors."""


class ArgumentError(BridgeError):
    """A script passed a bad argument to a bridge function.

    Raised for caller misuse (wrong handle type, missing value, wrong primitive
    type). Recoverable runtime conditions are returned as results instead.
    """

    def __init__(self, position: int, function: str, message: str) -> None:
        super().__init__(f"bad argument #{position} to '{function}' ({message})")
        self.position = position
        self.function = function
        self.reason = message


class ScriptRuntimeError(BridgeError):
    """Error raised by the script runtime itself (e.g. unknown method)."""


class ConfigError(BridgeError):
    """Configuration error (invalid env vars, invalid client options)."""
