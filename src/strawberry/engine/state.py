"""Immutable room state.

A room is in exactly one phase at a time: Start, Hinting or Endgame. While
hinting, the active hint is either being proposed or being resolved. Every
value here is frozen; transitions build new values with dataclasses.replace.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from .letters import EndgameLetterChoice, Hint

MIN_PLAYERS = 2
MAX_PLAYERS = 6

STARTING_HINTS = 11

# Countdowns (in uses) until each dummy pile grants a free hint, by player count
DUMMY_SCHEDULE: dict[int, tuple[int, ...]] = {
    2: (7, 8, 9, 10),
    3: (7, 8, 9),
    4: (7, 8),
    5: (7,),
    6: (),
}


class RoomPhase(StrEnum):
    START = "start"
    HINT = "hint"
    ENDGAME = "endgame"


class ActiveHintState(StrEnum):
    PROPOSING = "proposing"
    RESOLVING = "resolving"


class ResolveActionKind(StrEnum):
    NONE = "none"
    FLIP = "flip"
    GUESS = "guess"


@dataclass(frozen=True)
class StartPlayer:
    name: str
    word: str | None = None


@dataclass(frozen=True)
class StartPhase:
    """A room that is still gathering players and their secret words."""

    word_length: int
    players: tuple[StartPlayer, ...] = ()
    phase: RoomPhase = field(default=RoomPhase.START, init=False)


@dataclass(frozen=True)
class Hand:
    """A player's row of cards.

    letters holds word_length cards, plus one extra peeked card after the
    player flips past their last position. active_index is the face-up card;
    it equals word_length when the peeked card (or nothing) is face up.
    """

    letters: tuple[str, ...]
    guesses: tuple[str | None, ...]
    active_index: int = 0

    @property
    def active_letter(self) -> str | None:
        if self.active_index < len(self.letters):
            return self.letters[self.active_index]
        return None


@dataclass(frozen=True)
class Dummy:
    current_letter: str
    until_free_hint: int


@dataclass(frozen=True)
class HintingPlayer:
    name: str
    hand: Hand
    hints_given: int = 0


@dataclass(frozen=True)
class ResolveAction:
    player: int
    kind: ResolveActionKind
    guess: str | None = None
    actual: str | None = None


@dataclass(frozen=True)
class Proposing:
    # (player_number, hint) pairs sorted by player number
    proposed_hints: tuple[tuple[int, Hint], ...] = ()
    state: ActiveHintState = field(default=ActiveHintState.PROPOSING, init=False)

    def proposal_of(self, player_number: int) -> Hint | None:
        for number, hint in self.proposed_hints:
            if number == player_number:
                return hint
        return None


@dataclass(frozen=True)
class Resolving:
    hint: Hint
    player_actions: tuple[ResolveAction, ...] = ()
    # Every player's active_index at the moment the hint was given
    active_indexes: tuple[int, ...] = ()
    state: ActiveHintState = field(default=ActiveHintState.RESOLVING, init=False)


ActiveHint = Proposing | Resolving


@dataclass(frozen=True)
class LogEntry:
    hint: Hint
    total_hints: int
    active_indexes: tuple[int, ...]
    player_actions: tuple[ResolveAction, ...]


@dataclass(frozen=True)
class HintingPhase:
    word_length: int
    players: tuple[HintingPlayer, ...]
    dummies: tuple[Dummy, ...] = ()
    bonuses: tuple[str, ...] = ()
    hints_remaining: int = STARTING_HINTS
    hint_log: tuple[LogEntry, ...] = ()
    active_hint: ActiveHint = field(default_factory=Proposing)
    phase: RoomPhase = field(default=RoomPhase.HINT, init=False)


@dataclass(frozen=True)
class EndgamePlayer:
    name: str
    hand: Hand
    hints_given: int = 0
    guess: tuple[EndgameLetterChoice, ...] = ()
    committed: bool = False


@dataclass(frozen=True)
class EndgamePhase:
    word_length: int
    players: tuple[EndgamePlayer, ...]
    dummies: tuple[Dummy, ...] = ()
    bonuses: tuple[str, ...] = ()
    hint_log: tuple[LogEntry, ...] = ()
    hints_remaining: int = 0
    phase: RoomPhase = field(default=RoomPhase.ENDGAME, init=False)


Room = StartPhase | HintingPhase | EndgamePhase
StartedRoom = HintingPhase | EndgamePhase
