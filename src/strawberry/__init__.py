"""Rules engine for Strawberry, a cooperative word-deduction party game."""

import random

from .config import Config
from .engine.endgame import (
    available_letters,
    commit_final_guess,
    move_to_endgame,
    set_final_guess,
    set_hand_guess,
)
from .engine.hints import check_hint, give_hint, set_proposed_hint
from .engine.letters import (
    LETTERS,
    WILDCARD,
    BonusLetter,
    DummyLetter,
    HandSlot,
    Hint,
    HintSpecs,
    PlayerLetter,
    WildcardLetter,
)
from .engine.lobby import add_player, new_start, remove_player, set_player_word, start_game
from .engine.queries import (
    JoinStatus,
    ResolveActionChoice,
    all_guesses_committed,
    get_player_number,
    hint_specs,
    is_room_ready,
    join_status,
    players_with_outstanding_action,
    which_action_required,
)
from .engine.resolve import perform_resolve_action
from .engine.state import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    STARTING_HINTS,
    EndgamePhase,
    HintingPhase,
    Proposing,
    ResolveAction,
    ResolveActionKind,
    Resolving,
    Room,
    StartPhase,
)
from .errors import GuessConflict, HintProblem, Rejected
from .logging import configure_logging, get_logger
from .session import CommitResult, RoomSession, RoomTransport, VersionedRoom

__all__ = [
    "bootstrap",
    "Config",
    "LETTERS",
    "WILDCARD",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "STARTING_HINTS",
    "Room",
    "StartPhase",
    "HintingPhase",
    "EndgamePhase",
    "Proposing",
    "Resolving",
    "Hint",
    "HintSpecs",
    "PlayerLetter",
    "DummyLetter",
    "BonusLetter",
    "WildcardLetter",
    "HandSlot",
    "ResolveAction",
    "ResolveActionKind",
    "ResolveActionChoice",
    "JoinStatus",
    "HintProblem",
    "GuessConflict",
    "Rejected",
    "RoomSession",
    "RoomTransport",
    "VersionedRoom",
    "CommitResult",
    "new_start",
    "add_player",
    "remove_player",
    "set_player_word",
    "start_game",
    "set_proposed_hint",
    "check_hint",
    "give_hint",
    "perform_resolve_action",
    "move_to_endgame",
    "set_hand_guess",
    "available_letters",
    "set_final_guess",
    "commit_final_guess",
    "is_room_ready",
    "join_status",
    "get_player_number",
    "hint_specs",
    "which_action_required",
    "players_with_outstanding_action",
    "all_guesses_committed",
]


def bootstrap(config: Config | None = None) -> random.Random:
    """Configure logging for a host process and return its random source."""
    config = config or Config.from_env()

    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
        redact_words=config.redact_words,
    )

    logger = get_logger(__name__)
    logger.info(
        "engine_configured",
        log_level=config.log_level,
        seeded=config.seed is not None,
    )
    return config.make_rng()
