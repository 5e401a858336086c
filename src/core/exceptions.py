"""
Custom exceptions used across layers.

Everything derives from GameError, so the service (and whatever transport sits on top of it) can catch one type.
Rule violations are separated from infrastructure failures: the first are the player's fault, the second are not.
"""


class GameError(Exception):
    """Top-level exception for anything raised by this application."""


class InvalidRequestError(GameError):
    """Request data cannot be interpreted (raised from the API models' validators)."""


class GameStateError(GameError):
    """Stored state is not consistent with the rules of the game."""


# --- RULE VIOLATIONS ---
class RuleViolationError(GameError):
    """The requested action breaks a rule of the game."""


class LetterNotInRackError(RuleViolationError):
    pass


class PositionOutOfBoundsError(RuleViolationError):
    pass


class CellOccupiedError(RuleViolationError):
    pass


class UnknownWordError(RuleViolationError):
    """A run formed by the move is not in the dictionary."""

    def __init__(self, word: str) -> None:
        self.word = word
        super().__init__(f"Unknown word {word!r}")


class NotConnectedError(RuleViolationError):
    pass


class NotPlayersTurnError(RuleViolationError):
    pass


class NotNextMoveError(RuleViolationError):
    pass


class GameAlreadyStartedError(RuleViolationError):
    pass


class GameFullError(RuleViolationError):
    pass


class GameNotInProgressError(RuleViolationError):
    pass


class PlayerNotInGameError(RuleViolationError):
    pass


# --- PERSISTENCE ---
class RepositoryError(GameError):
    """Problem finding or writing a record."""


class GameNotFoundError(RepositoryError):
    pass


class PlayerNotFoundError(RepositoryError):
    pass


class MoveNotFoundError(RepositoryError):
    pass


class StaleGameStateError(RepositoryError):
    """The game changed between loading it and committing the update."""


# --- COLLABORATORS ---
class InfrastructureError(GameError):
    """An external collaborator (store, dictionary) failed. Never retried here."""


class StoreUnavailableError(InfrastructureError):
    pass


class DictionaryUnavailableError(InfrastructureError):
    pass
