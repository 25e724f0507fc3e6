"""Exceptions and error kinds raised or returned by the room engine.

Illegal-input faults are raised: the attempted call is discarded and the
caller should refresh its room and re-derive what is legal. Conflicts between
endgame guesses are an ordinary branch of play, so they come back as a
Rejected value instead.
"""

from dataclasses import dataclass
from enum import StrEnum


class HintProblem(StrEnum):
    """Why a hint cannot be given."""

    UNKNOWN_GIVER = "unknown_giver"
    NO_HINTS_REMAINING = "no_hints_remaining"
    BONUS_NOT_AVAILABLE = "bonus_not_available"
    UNKNOWN_DUMMY = "unknown_dummy"
    DUMMY_LETTER_MISMATCH = "dummy_letter_mismatch"
    UNKNOWN_PLAYER = "unknown_player"
    PLAYER_LETTER_NOT_ACTIVE = "player_letter_not_active"


class GuessConflict(StrEnum):
    """Why a set of endgame guesses is inconsistent."""

    HAND_SLOT_REUSED = "hand_slot_reused"
    HAND_SLOT_OUT_OF_RANGE = "hand_slot_out_of_range"
    WILDCARD_TAKEN = "wildcard_taken"
    BONUS_EXHAUSTED = "bonus_exhausted"
    ALREADY_COMMITTED = "already_committed"


@dataclass(frozen=True)
class Rejected:
    """A candidate final guess that clashes with other claims or a locked guess."""

    conflict: GuessConflict
    player_number: int


class StrawberryError(Exception):
    """Base exception for all room engine errors."""

    pass


class IllegalInputError(StrawberryError):
    """A transition was called with a reference that the room does not have."""

    pass


class UnknownPlayerError(IllegalInputError):
    def __init__(self, player: str | int):
        self.player = player
        super().__init__(f"Player {player!r} is not in the room")


class DuplicatePlayerError(IllegalInputError):
    def __init__(self, player_name: str):
        self.player_name = player_name
        super().__init__(f"Player {player_name!r} is already in the room")


class RoomFullError(IllegalInputError):
    def __init__(self, player_name: str, max_players: int):
        self.player_name = player_name
        self.max_players = max_players
        super().__init__(
            f"Cannot add {player_name!r}: room already has {max_players} players"
        )


class RoomNotReadyError(IllegalInputError):
    """The room is missing words or has too few or too many players."""

    pass


class IllegalWordError(IllegalInputError):
    def __init__(self, word: str, reason: str):
        self.reason = reason
        # The word itself is secret; keep it out of the message.
        super().__init__(f"Illegal word of length {len(word)}: {reason}")


class WrongPhaseError(IllegalInputError):
    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected room in {expected}, got {actual}")


class IllegalHintError(IllegalInputError):
    """The hint cites a letter that is not actually available."""

    def __init__(self, problem: HintProblem, detail: str = ""):
        self.problem = problem
        self.detail = detail
        message = f"illegal hint: {problem.value}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class IllegalActionError(IllegalInputError):
    """A resolve action the player is not allowed to take right now."""

    pass


class InvalidLettersError(IllegalInputError):
    """The endgame guesses in the room claim letters more than once."""

    def __init__(self, conflict: GuessConflict, player_number: int):
        self.conflict = conflict
        self.player_number = player_number
        super().__init__(
            f"Invalid letters for player {player_number}: {conflict.value}"
        )


class CorruptStateError(StrawberryError):
    """The room value breaks an invariant and cannot be played from."""

    pass
