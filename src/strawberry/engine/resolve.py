"""Resolving the active hint.

Every player whose face-up letter was used answers the hint once, in any
order: decline, flip to the next card, or guess a peeked bonus card. When
the last involved player has answered, the hint is logged and paid for and
the room goes back to Proposing.
"""

import random
from dataclasses import replace

from ..errors import IllegalActionError
from ..logging import get_logger
from .letters import BonusLetter, DummyLetter, random_letter
from .queries import (
    ResolveActionChoice,
    players_with_outstanding_action,
    require_resolving,
    which_action_required,
)
from .state import (
    Dummy,
    HintingPhase,
    LogEntry,
    Proposing,
    ResolveAction,
    ResolveActionKind,
)

logger = get_logger(__name__)


def _check_action(room: HintingPhase, action: ResolveAction) -> None:
    if not 1 <= action.player <= len(room.players):
        raise IllegalActionError(f"Unknown player number {action.player}")
    player = room.players[action.player - 1]
    required = which_action_required(room, player.name)

    match required:
        case ResolveActionChoice.UNINVOLVED | ResolveActionChoice.DONE:
            raise IllegalActionError(
                f"Player {action.player} has nothing to resolve ({required.value})"
            )
    match action.kind:
        case ResolveActionKind.FLIP if required is not ResolveActionChoice.FLIP:
            raise IllegalActionError(f"Player {action.player} must guess, not flip")
        case ResolveActionKind.GUESS if required is not ResolveActionChoice.GUESS:
            raise IllegalActionError(f"Player {action.player} has no card to guess")
        case ResolveActionKind.GUESS:
            if action.guess is None or action.actual is None:
                raise IllegalActionError("A guess needs both the guess and the actual letter")
            if action.actual != player.hand.letters[room.word_length]:
                raise IllegalActionError(
                    f"Player {action.player} claimed the wrong peeked letter"
                )


def _apply_action(
    room: HintingPhase, action: ResolveAction, rng: random.Random
) -> HintingPhase:
    player = room.players[action.player - 1]
    hand = player.hand
    bonuses = room.bonuses

    match action.kind:
        case ResolveActionKind.NONE:
            return room
        case ResolveActionKind.FLIP:
            letters = hand.letters
            if hand.active_index == room.word_length - 1:
                # Flipping past the last card peeks at a fresh one.
                letters = letters + (random_letter(rng),)
            hand = replace(hand, letters=letters, active_index=hand.active_index + 1)
        case ResolveActionKind.GUESS:
            if action.guess == action.actual:
                bonuses = bonuses + (action.guess,)
            # The guessed card is used up either way; index doesn't change.
            hand = replace(
                hand,
                letters=hand.letters[: room.word_length] + (random_letter(rng),),
            )

    players = list(room.players)
    players[action.player - 1] = replace(player, hand=hand)
    return replace(room, players=tuple(players), bonuses=bonuses)


def complete_hint(room: HintingPhase, rng: random.Random) -> HintingPhase:
    """Log the resolved hint, pay for it, and use up its dummy and bonus cards."""
    room = require_resolving(room)
    active_hint = room.active_hint
    log_entry = LogEntry(
        hint=active_hint.hint,
        total_hints=len(room.hint_log) + room.hints_remaining,
        active_indexes=active_hint.active_indexes,
        player_actions=active_hint.player_actions,
    )
    hints_remaining = room.hints_remaining - 1

    # 0-indexed
    dummies_used: set[int] = set()
    bonuses_used: set[int] = set()
    for las in active_hint.hint.letters_and_sources:
        match las:
            case BonusLetter(letter=letter):
                bonuses_used.add(room.bonuses.index(letter))
            case DummyLetter(dummy_number=n):
                dummies_used.add(n - 1)

    dummies = []
    for index, dummy in enumerate(room.dummies):
        if index not in dummies_used:
            dummies.append(dummy)
            continue
        if dummy.until_free_hint == 1:
            hints_remaining += 1
            logger.info("free_hint_granted", dummy=index + 1)
        dummies.append(
            Dummy(
                current_letter=random_letter(rng),
                until_free_hint=dummy.until_free_hint - 1,
            )
        )
    bonuses = tuple(
        bonus for index, bonus in enumerate(room.bonuses) if index not in bonuses_used
    )

    logger.info(
        "hint_resolved",
        giver=active_hint.hint.given_by_player,
        actions=len(active_hint.player_actions),
        hints_remaining=hints_remaining,
    )
    return replace(
        room,
        dummies=tuple(dummies),
        bonuses=bonuses,
        hints_remaining=hints_remaining,
        hint_log=room.hint_log + (log_entry,),
        active_hint=Proposing(),
    )


def perform_resolve_action(
    room: HintingPhase, action: ResolveAction, rng: random.Random
) -> HintingPhase:
    """Record one player's answer to the active hint."""
    room = require_resolving(room)
    _check_action(room, action)

    new_room = replace(
        room,
        active_hint=replace(
            room.active_hint,
            player_actions=room.active_hint.player_actions + (action,),
        ),
    )
    new_room = _apply_action(new_room, action, rng)
    logger.debug("resolve_action", player=action.player, kind=action.kind.value)

    if not players_with_outstanding_action(new_room.active_hint):
        return complete_hint(new_room, rng)
    return new_room
