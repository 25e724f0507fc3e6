"""Endgame: no more hints, every player assembles a final guess at their word.

A final guess is a list of letter claims: positions of the player's own
hand, the single shared wildcard, or letters from the bonus pool. Claims
are re-validated from scratch across all players every time.
"""

from dataclasses import dataclass, field, replace

from ..errors import (
    GuessConflict,
    IllegalInputError,
    InvalidLettersError,
    Rejected,
    UnknownPlayerError,
    WrongPhaseError,
)
from ..logging import get_logger
from .letters import (
    LETTERS,
    BonusLetter,
    EndgameLetterChoice,
    HandSlot,
    WildcardLetter,
)
from .queries import require_phase, require_proposing
from .state import EndgamePhase, EndgamePlayer, HintingPhase, StartedRoom

logger = get_logger(__name__)


def move_to_endgame(room: HintingPhase) -> EndgamePhase:
    """Stop hinting. Peeked cards are discarded and nothing stays face up."""
    room = require_proposing(room)
    players = tuple(
        EndgamePlayer(
            name=player.name,
            hand=replace(
                player.hand,
                letters=player.hand.letters[: room.word_length],
                active_index=room.word_length,
            ),
            hints_given=player.hints_given,
            guess=(),
            committed=False,
        )
        for player in room.players
    )
    logger.info(
        "moved_to_endgame",
        hints_used=len(room.hint_log),
        hints_left=room.hints_remaining,
    )
    return EndgamePhase(
        word_length=room.word_length,
        players=players,
        dummies=room.dummies,
        bonuses=room.bonuses,
        hint_log=room.hint_log,
        hints_remaining=0,
    )


def _check_player_number(room: StartedRoom, player_number: int) -> None:
    if not 1 <= player_number <= len(room.players):
        raise UnknownPlayerError(player_number)


def set_hand_guess(
    room: StartedRoom, player_number: int, index: int, guess: str | None
) -> StartedRoom:
    """Note down what a player believes one of their own positions holds."""
    if not isinstance(room, HintingPhase | EndgamePhase):
        raise WrongPhaseError("HintingPhase or EndgamePhase", type(room).__name__)
    _check_player_number(room, player_number)
    if not 0 <= index < room.word_length:
        raise IllegalInputError(f"Position {index} is outside the word")
    if guess is not None and guess not in LETTERS:
        raise IllegalInputError(f"{guess!r} is not a letter of the alphabet")

    player = room.players[player_number - 1]
    guesses = list(player.hand.guesses)
    guesses[index] = guess
    players = list(room.players)
    players[player_number - 1] = replace(
        player, hand=replace(player.hand, guesses=tuple(guesses))
    )
    return replace(room, players=tuple(players))


@dataclass
class _Claims:
    own_slots: set[int] = field(default_factory=set)
    wildcard_available: bool = True
    bonuses: list[str] = field(default_factory=list)


def _tally_claims(room: EndgamePhase, player_number: int) -> _Claims | GuessConflict:
    """Replay every player's guess and work out what is still free.

    Own hand slots only matter for player_number; the wildcard and the
    bonus pool are shared by everybody.
    """
    claims = _Claims(bonuses=list(room.bonuses))
    for choice in room.players[player_number - 1].guess:
        if isinstance(choice, HandSlot):
            if not 0 <= choice.index < room.word_length:
                return GuessConflict.HAND_SLOT_OUT_OF_RANGE
            if choice.index in claims.own_slots:
                return GuessConflict.HAND_SLOT_REUSED
            claims.own_slots.add(choice.index)

    for player in room.players:
        for choice in player.guess:
            match choice:
                case WildcardLetter():
                    if not claims.wildcard_available:
                        return GuessConflict.WILDCARD_TAKEN
                    claims.wildcard_available = False
                case BonusLetter(letter=letter):
                    if letter not in claims.bonuses:
                        return GuessConflict.BONUS_EXHAUSTED
                    claims.bonuses.remove(letter)
                case HandSlot():
                    pass
                case _:
                    raise IllegalInputError(
                        f"{choice!r} cannot be claimed in a final guess"
                    )
    return claims


def available_letters(
    room: EndgamePhase, player_number: int
) -> list[EndgameLetterChoice]:
    """Letters the player could still add to their final guess.

    Raises InvalidLettersError if the guesses already in the room
    claim something twice.
    """
    room = require_phase(room, EndgamePhase)
    _check_player_number(room, player_number)
    claims = _tally_claims(room, player_number)
    if isinstance(claims, GuessConflict):
        raise InvalidLettersError(claims, player_number)

    available: list[EndgameLetterChoice] = [
        HandSlot(index=i)
        for i in range(room.word_length)
        if i not in claims.own_slots
    ]
    if claims.wildcard_available:
        available.append(WildcardLetter())
    available.extend(BonusLetter(letter=bonus) for bonus in claims.bonuses)
    return available


def set_final_guess(
    room: EndgamePhase,
    player_number: int,
    guess: tuple[EndgameLetterChoice, ...] | list[EndgameLetterChoice],
) -> EndgamePhase | Rejected:
    """Install a candidate final guess, or reject it if it clashes with others."""
    room = require_phase(room, EndgamePhase)
    _check_player_number(room, player_number)
    if room.players[player_number - 1].committed:
        conflict = GuessConflict.ALREADY_COMMITTED
        logger.info("final_guess_rejected", player=player_number, conflict=conflict.value)
        return Rejected(conflict=conflict, player_number=player_number)

    players = list(room.players)
    players[player_number - 1] = replace(players[player_number - 1], guess=tuple(guess))
    new_room = replace(room, players=tuple(players))

    claims = _tally_claims(new_room, player_number)
    if isinstance(claims, GuessConflict):
        logger.info("final_guess_rejected", player=player_number, conflict=claims.value)
        return Rejected(conflict=claims, player_number=player_number)
    return new_room


def commit_final_guess(room: EndgamePhase, player_number: int) -> EndgamePhase:
    """Lock in a player's final guess."""
    room = require_phase(room, EndgamePhase)
    _check_player_number(room, player_number)
    players = list(room.players)
    players[player_number - 1] = replace(players[player_number - 1], committed=True)
    logger.info("final_guess_committed", player=player_number)
    return replace(room, players=tuple(players))
