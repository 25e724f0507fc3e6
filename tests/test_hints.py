"""Tests for proposing and giving hints."""

from dataclasses import replace

import pytest
from conftest import make_hand

from strawberry.engine.hints import check_hint, give_hint, set_proposed_hint
from strawberry.engine.letters import (
    BonusLetter,
    DummyLetter,
    HandSlot,
    Hint,
    HintSpecs,
    PlayerLetter,
    WildcardLetter,
)
from strawberry.engine.queries import hint_specs
from strawberry.engine.state import HintingPhase, HintingPlayer, Proposing, Resolving
from strawberry.errors import (
    HintProblem,
    IllegalHintError,
    IllegalInputError,
    UnknownPlayerError,
    WrongPhaseError,
)


def _hint(giver: int, *letters) -> Hint:
    return Hint(given_by_player=giver, letters_and_sources=tuple(letters))


def test_set_proposed_hint(hinting_room: HintingPhase):
    """Proposals are keyed by player number and can be withdrawn."""
    hint = _hint(2, PlayerLetter("A", 1), WildcardLetter())
    room = set_proposed_hint(hinting_room, "bob", hint)
    assert room.active_hint.proposed_hints == ((2, hint),)
    assert room.active_hint.proposal_of(2) == hint
    assert room.active_hint.proposal_of(1) is None
    assert hinting_room.active_hint.proposed_hints == ()

    room = set_proposed_hint(room, "bob", None)
    assert room.active_hint == Proposing()


def test_proposals_are_ordered_and_frozen(hinting_room: HintingPhase):
    """Proposals stay sorted by player and the returned room is a value."""
    carol_hint = _hint(3, PlayerLetter("A", 1))
    alice_hint = _hint(1, WildcardLetter())
    room = set_proposed_hint(hinting_room, "carol", carol_hint)
    room = set_proposed_hint(room, "alice", alice_hint)
    assert room.active_hint.proposed_hints == ((1, alice_hint), (3, carol_hint))

    with pytest.raises(TypeError):
        room.active_hint.proposed_hints[1] = (2, alice_hint)
    assert hash(room) == hash(set_proposed_hint(room, "alice", alice_hint))


def test_hint_rejects_non_hint_source(hinting_room: HintingPhase):
    """An endgame hand slot is not something a hint can spell with."""
    with pytest.raises(IllegalInputError):
        check_hint(hinting_room, _hint(1, HandSlot(0)))


def test_set_proposed_hint_unknown_player(hinting_room: HintingPhase):
    """Only players in the room may propose."""
    with pytest.raises(UnknownPlayerError):
        set_proposed_hint(hinting_room, "mallory", _hint(1, WildcardLetter()))


def test_give_hint_rejects_inactive_player_letter(rng):
    """Citing a letter that is not the player's face-up card fails."""
    room = HintingPhase(
        word_length=2,
        players=(
            HintingPlayer(name="alice", hand=make_hand("AB", word_length=2)),
            HintingPlayer(name="bob", hand=make_hand("CD", word_length=2)),
        ),
    )
    hint = _hint(2, PlayerLetter("B", 1))
    assert check_hint(room, hint) == HintProblem.PLAYER_LETTER_NOT_ACTIVE
    with pytest.raises(IllegalHintError) as excinfo:
        give_hint(room, hint, rng)
    assert excinfo.value.problem == HintProblem.PLAYER_LETTER_NOT_ACTIVE
    assert isinstance(room.active_hint, Proposing)


@pytest.mark.parametrize(
    "letter,problem",
    [
        (BonusLetter("T"), HintProblem.BONUS_NOT_AVAILABLE),
        (DummyLetter("K", 2), HintProblem.DUMMY_LETTER_MISMATCH),
        (DummyLetter("K", 3), HintProblem.UNKNOWN_DUMMY),
        (PlayerLetter("A", 4), HintProblem.UNKNOWN_PLAYER),
        (PlayerLetter("B", 1), HintProblem.PLAYER_LETTER_NOT_ACTIVE),
    ],
)
def test_give_hint_legality(hinting_room: HintingPhase, rng, letter, problem):
    """Every cited letter must come from a source that really shows it."""
    hint = _hint(3, PlayerLetter("D", 2), letter)
    with pytest.raises(IllegalHintError) as excinfo:
        give_hint(hinting_room, hint, rng)
    assert excinfo.value.problem == problem
    assert hinting_room.hints_remaining == 11
    assert hinting_room.players[2].hints_given == 0


def test_check_hint_accepts_available_letters(hinting_room: HintingPhase):
    """Face-up letters, dummies, bonuses and the wildcard are all fine."""
    hint = _hint(
        3,
        PlayerLetter("A", 1),
        DummyLetter("K", 1),
        BonusLetter("S"),
        WildcardLetter(),
    )
    assert check_hint(hinting_room, hint) is None


def test_check_hint_unknown_giver(hinting_room: HintingPhase):
    assert check_hint(hinting_room, _hint(9, WildcardLetter())) == HintProblem.UNKNOWN_GIVER


def test_check_hint_without_hints_left(hinting_room: HintingPhase):
    """No hint can be given once the budget is spent."""
    room = replace(hinting_room, hints_remaining=0)
    assert check_hint(room, _hint(1, WildcardLetter())) == HintProblem.NO_HINTS_REMAINING


def test_give_hint_moves_to_resolving(hinting_room: HintingPhase, rng):
    """A legal hint becomes the active hint and counts for its giver."""
    hint = _hint(3, PlayerLetter("A", 1), PlayerLetter("D", 2), WildcardLetter())
    room = give_hint(hinting_room, hint, rng)
    assert isinstance(room.active_hint, Resolving)
    assert room.active_hint.hint == hint
    assert room.active_hint.player_actions == ()
    assert room.active_hint.active_indexes == (0, 0, 0)
    assert room.players[2].hints_given == 1
    # Paid for only once resolved
    assert room.hints_remaining == 11


def test_give_hint_without_players_resolves_at_once(hinting_room: HintingPhase, rng):
    """A hint nobody has to answer is logged and paid for immediately."""
    hint = _hint(1, DummyLetter("K", 1), WildcardLetter())
    room = give_hint(hinting_room, hint, rng)
    assert isinstance(room.active_hint, Proposing)
    assert room.hints_remaining == 10
    assert len(room.hint_log) == 1
    assert room.hint_log[0].hint == hint
    assert room.dummies[0].until_free_hint == 6
    assert room.players[0].hints_given == 1


def test_give_hint_while_resolving(hinting_room: HintingPhase, rng):
    """A second hint cannot be given until the first is resolved."""
    room = give_hint(hinting_room, _hint(3, PlayerLetter("A", 1)), rng)
    with pytest.raises(WrongPhaseError):
        give_hint(room, _hint(3, PlayerLetter("A", 1)), rng)


def test_hint_specs():
    """Specs count distinct sources, not letters."""
    hint = _hint(
        1,
        PlayerLetter("A", 2),
        PlayerLetter("A", 2),
        PlayerLetter("E", 3),
        DummyLetter("K", 1),
        BonusLetter("S"),
        BonusLetter("S"),
        WildcardLetter(),
    )
    assert hint_specs(hint) == HintSpecs(
        length=7, players=2, wildcard=True, dummies=1, bonuses=1
    )
