"""Proposing and giving hints.

Any player may propose a hint while the room is Proposing. Giving a hint
commits it: after a legality check against the letters actually on the
table, the room moves to Resolving, where the involved players respond.
"""

import random
from dataclasses import replace

from ..errors import HintProblem, IllegalHintError, IllegalInputError
from ..logging import get_logger
from .letters import (
    BonusLetter,
    DummyLetter,
    Hint,
    LetterAndSource,
    PlayerLetter,
    WildcardLetter,
)
from .queries import (
    player_number_of,
    players_with_outstanding_action,
    require_proposing,
)
from .resolve import complete_hint
from .state import HintingPhase, Proposing, Resolving

logger = get_logger(__name__)


def set_proposed_hint(
    room: HintingPhase, player_name: str, hint: Hint | None
) -> HintingPhase:
    """Store, or clear with None, the named player's proposed hint."""
    room = require_proposing(room)
    player_number = player_number_of(room, player_name)

    proposed_hints = [
        (number, proposed)
        for number, proposed in room.active_hint.proposed_hints
        if number != player_number
    ]
    if hint is not None:
        proposed_hints.append((player_number, hint))
    proposed_hints.sort(key=lambda pair: pair[0])
    return replace(room, active_hint=Proposing(proposed_hints=tuple(proposed_hints)))


def _check_letter(room: HintingPhase, las: LetterAndSource) -> HintProblem | None:
    match las:
        case BonusLetter(letter=letter):
            if letter not in room.bonuses:
                return HintProblem.BONUS_NOT_AVAILABLE
        case DummyLetter(letter=letter, dummy_number=n):
            if not 1 <= n <= len(room.dummies):
                return HintProblem.UNKNOWN_DUMMY
            if room.dummies[n - 1].current_letter != letter:
                return HintProblem.DUMMY_LETTER_MISMATCH
        case PlayerLetter(letter=letter, player_number=n):
            if not 1 <= n <= len(room.players):
                return HintProblem.UNKNOWN_PLAYER
            if room.players[n - 1].hand.active_letter != letter:
                return HintProblem.PLAYER_LETTER_NOT_ACTIVE
        case WildcardLetter():
            pass
        case _:
            raise IllegalInputError(f"{las!r} is not a letter source a hint can use")
    return None


def check_hint(room: HintingPhase, hint: Hint) -> HintProblem | None:
    """Return the first reason the hint cannot be given right now, or None."""
    if not 1 <= hint.given_by_player <= len(room.players):
        return HintProblem.UNKNOWN_GIVER
    if room.hints_remaining <= 0:
        return HintProblem.NO_HINTS_REMAINING
    for las in hint.letters_and_sources:
        problem = _check_letter(room, las)
        if problem is not None:
            return problem
    return None


def give_hint(room: HintingPhase, hint: Hint, rng: random.Random) -> HintingPhase:
    """Commit a hint and move the room to Resolving.

    Raises IllegalHintError, leaving the room as it was, if any letter
    is not actually available. A hint that uses no player's letter has
    nobody to resolve it, so it completes at once and the room comes
    back Proposing.
    """
    room = require_proposing(room)
    problem = check_hint(room, hint)
    if problem is not None:
        logger.info("hint_rejected", problem=problem.value, giver=hint.given_by_player)
        raise IllegalHintError(problem, hint.text)

    giver = room.players[hint.given_by_player - 1]
    players = list(room.players)
    players[hint.given_by_player - 1] = replace(giver, hints_given=giver.hints_given + 1)

    new_room = replace(
        room,
        players=tuple(players),
        active_hint=Resolving(
            hint=hint,
            player_actions=(),
            active_indexes=tuple(p.hand.active_index for p in room.players),
        ),
    )
    logger.info(
        "hint_given",
        giver=hint.given_by_player,
        length=len(hint.letters_and_sources),
        hints_remaining=room.hints_remaining,
    )

    # TODO: confirm with the game rules whether a hint that involves no
    # player should be allowed at all; for now it resolves immediately.
    if not players_with_outstanding_action(new_room.active_hint):
        return complete_hint(new_room, rng)
    return new_room
