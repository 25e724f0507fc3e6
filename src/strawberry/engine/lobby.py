"""Start phase: gathering players and words, then dealing the hands."""

import random
from dataclasses import replace

from ..errors import (
    DuplicatePlayerError,
    IllegalInputError,
    IllegalWordError,
    RoomFullError,
    RoomNotReadyError,
)
from ..logging import get_logger
from .letters import LETTERS, random_letter
from .queries import JoinStatus, is_room_ready, join_status, require_phase
from .state import (
    DUMMY_SCHEDULE,
    MAX_PLAYERS,
    STARTING_HINTS,
    Dummy,
    Hand,
    HintingPhase,
    HintingPlayer,
    Proposing,
    StartPhase,
    StartPlayer,
)

logger = get_logger(__name__)


def new_start(first_player_name: str, word_length: int) -> StartPhase:
    """Create a brand-new room holding only its first player."""
    if word_length < 1:
        raise IllegalInputError(f"Word length must be positive, got {word_length}")
    return StartPhase(
        word_length=word_length,
        players=(StartPlayer(name=first_player_name),),
    )


def add_player(room: StartPhase, player_name: str) -> StartPhase:
    room = require_phase(room, StartPhase)
    match join_status(room, player_name):
        case JoinStatus.JOINED:
            raise DuplicatePlayerError(player_name)
        case JoinStatus.ROOM_FULL:
            raise RoomFullError(player_name, MAX_PLAYERS)
    logger.debug("player_added", player=player_name, players=len(room.players) + 1)
    return replace(room, players=room.players + (StartPlayer(name=player_name),))


def remove_player(room: StartPhase, player_name: str) -> StartPhase:
    room = require_phase(room, StartPhase)
    return replace(
        room,
        players=tuple(p for p in room.players if p.name != player_name),
    )


def _normalize_word(room: StartPhase, word: str) -> str:
    word = word.strip().upper()
    if len(word) != room.word_length:
        raise IllegalWordError(word, f"expected {room.word_length} letters")
    if any(letter not in LETTERS for letter in word):
        raise IllegalWordError(word, "uses a letter outside the alphabet")
    return word


def set_player_word(room: StartPhase, player_name: str, word: str | None) -> StartPhase:
    """Set (or clear, with None) one player's secret word. Unknown names are ignored."""
    room = require_phase(room, StartPhase)
    if not any(p.name == player_name for p in room.players):
        return room
    if word is not None:
        word = _normalize_word(room, word)
    logger.debug("player_word_set", player=player_name, word=word)
    return replace(
        room,
        players=tuple(
            StartPlayer(name=p.name, word=word) if p.name == player_name else p
            for p in room.players
        ),
    )


def _shuffled(word: str, rng: random.Random) -> tuple[str, ...]:
    letters = list(word)
    rng.shuffle(letters)
    return tuple(letters)


def start_game(room: StartPhase, rng: random.Random) -> HintingPhase:
    """Deal every player the previous player's word and start hinting."""
    room = require_phase(room, StartPhase)
    if not is_room_ready(room):
        raise RoomNotReadyError(
            f"Room with {len(room.players)} players is not ready to start"
        )

    players = []
    for index, player in enumerate(room.players):
        # Each player receives the previous player's word.
        word = room.players[index - 1].word
        if word is None:
            raise RoomNotReadyError(f"Player {index} has no word")
        players.append(
            HintingPlayer(
                name=player.name,
                hand=Hand(
                    letters=_shuffled(word, rng),
                    guesses=(None,) * len(word),
                    active_index=0,
                ),
            )
        )

    dummies = tuple(
        Dummy(current_letter=random_letter(rng), until_free_hint=countdown)
        for countdown in DUMMY_SCHEDULE[len(players)]
    )

    logger.info("game_started", players=len(players), dummies=len(dummies))
    return HintingPhase(
        word_length=room.word_length,
        players=tuple(players),
        dummies=dummies,
        bonuses=(),
        hints_remaining=STARTING_HINTS,
        hint_log=(),
        active_hint=Proposing(),
    )
