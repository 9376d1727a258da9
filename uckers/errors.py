# Caller and internal errors raised by the rules core. Nothing here is retryable.
class UckersError(Exception):
    """Base exception for rules-core errors."""

    pass


class ConfigError(UckersError, ValueError):
    """Raised when configuration values are out of range."""

    pass


class InvalidPlayer(UckersError, ValueError):
    """Raised when a player is not part of the configured game."""

    pass


class InvalidPlayerCount(UckersError, ValueError):
    """Raised when the player order size is outside the configured bounds."""

    pass


class InvalidTokenIndex(UckersError, IndexError):
    """Raised when a token index is outside [0, tokens_per_player)."""

    pass


class InvalidRoll(UckersError, ValueError):
    """Raised when a die roll is outside [1, 6]."""

    pass


class InvalidMove(UckersError, ValueError):
    """Raised when a move is malformed or not among the legal moves."""

    pass


class TopologyError(UckersError, ValueError):
    """Raised when a home index or progress value is outside the home lane."""

    pass


class InvariantViolation(UckersError, RuntimeError):
    """Raised when token state breaks an invariant (internal bug, fatal)."""

    pass


class GameOverError(UckersError, RuntimeError):
    """Raised when a turn is played after a player has already won."""

    pass
