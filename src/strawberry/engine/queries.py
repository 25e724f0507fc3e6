"""Read-only views over a room.

These never change the room. The presentation layer uses them to decide
what a player may do next; the transitions use them to check legality.
"""

from enum import StrEnum
from typing import TypeVar

from ..errors import CorruptStateError, UnknownPlayerError, WrongPhaseError
from .letters import (
    BonusLetter,
    DummyLetter,
    Hint,
    HintSpecs,
    PlayerLetter,
    WildcardLetter,
)
from .state import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    EndgamePhase,
    HintingPhase,
    Proposing,
    Resolving,
    Room,
    StartPhase,
)


R = TypeVar("R")


class ResolveActionChoice(StrEnum):
    # The player's letters were not used in the hint.
    UNINVOLVED = "uninvolved"
    # The player already acted on this hint.
    DONE = "done"
    # The player must flip to their next card or decline.
    FLIP = "flip"
    # The player must guess their peeked bonus letter.
    GUESS = "guess"


class JoinStatus(StrEnum):
    JOINING = "joining"
    JOINED = "joined"
    ROOM_FULL = "room_full"


def require_phase(room: Room, phase_type: type[R]) -> R:
    """Return room unchanged if it is in the given phase, else raise."""
    if not isinstance(room, phase_type):
        raise WrongPhaseError(phase_type.__name__, type(room).__name__)
    return room


def require_proposing(room: Room) -> HintingPhase:
    room = require_phase(room, HintingPhase)
    if not isinstance(room.active_hint, Proposing):
        raise WrongPhaseError("Proposing", type(room.active_hint).__name__)
    return room


def require_resolving(room: Room) -> HintingPhase:
    room = require_phase(room, HintingPhase)
    if not isinstance(room.active_hint, Resolving):
        raise WrongPhaseError("Resolving", type(room.active_hint).__name__)
    return room


def is_room_ready(room: StartPhase) -> bool:
    """Every player has a word and the player count is playable."""
    return (
        all(player.word is not None for player in room.players)
        and MIN_PLAYERS <= len(room.players) <= MAX_PLAYERS
    )


def join_status(room: StartPhase, player_name: str) -> JoinStatus:
    """Where a would-be player stands with respect to joining the room."""
    if any(player.name == player_name for player in room.players):
        return JoinStatus.JOINED
    if len(room.players) >= MAX_PLAYERS:
        return JoinStatus.ROOM_FULL
    return JoinStatus.JOINING


def get_player_number(room: Room, player_name: str) -> int | None:
    """1-based seat of the named player, or None."""
    for i, player in enumerate(room.players):
        if player.name == player_name:
            return i + 1
    return None


def player_number_of(room: Room, player_name: str) -> int:
    player_number = get_player_number(room, player_name)
    if player_number is None:
        raise UnknownPlayerError(player_name)
    return player_number


def hint_specs(hint: Hint) -> HintSpecs:
    """Count the distinct sources a hint draws on."""
    players: set[int] = set()
    dummies: set[int] = set()
    bonuses: set[str] = set()
    wildcard = False
    for las in hint.letters_and_sources:
        match las:
            case PlayerLetter(player_number=n):
                players.add(n)
            case DummyLetter(dummy_number=n):
                dummies.add(n)
            case BonusLetter(letter=letter):
                bonuses.add(letter)
            case WildcardLetter():
                wildcard = True
    return HintSpecs(
        length=len(hint.letters_and_sources),
        players=len(players),
        wildcard=wildcard,
        dummies=len(dummies),
        bonuses=len(bonuses),
    )


def involved_players(hint: Hint) -> set[int]:
    """Player numbers whose face-up letters the hint uses."""
    return {
        las.player_number
        for las in hint.letters_and_sources
        if isinstance(las, PlayerLetter)
    }


def players_with_outstanding_action(active_hint: Resolving) -> set[int]:
    """Involved players who have not yet acted on the hint."""
    outstanding = involved_players(active_hint.hint)
    for action in active_hint.player_actions:
        outstanding.discard(action.player)
    return outstanding


def which_action_required(room: HintingPhase, player_name: str) -> ResolveActionChoice:
    """What the named player has to do about the hint being resolved."""
    room = require_resolving(room)
    active_hint = room.active_hint
    player_number = get_player_number(room, player_name)
    if player_number is None or player_number not in involved_players(active_hint.hint):
        return ResolveActionChoice.UNINVOLVED
    if any(action.player == player_number for action in active_hint.player_actions):
        return ResolveActionChoice.DONE

    hand_length = len(room.players[player_number - 1].hand.letters)
    if hand_length == room.word_length + 1:
        return ResolveActionChoice.GUESS
    if hand_length != room.word_length:
        raise CorruptStateError(
            f"Inconsistent state: hand of player {player_number} "
            f"has illegal length {hand_length}"
        )
    return ResolveActionChoice.FLIP


def all_guesses_committed(room: EndgamePhase) -> bool:
    return all(player.committed for player in room.players)
