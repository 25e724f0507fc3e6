"""Shared test fixtures for the Strawberry room engine."""

import random

import pytest

from strawberry.engine.state import (
    Dummy,
    Hand,
    HintingPhase,
    HintingPlayer,
    Room,
    StartPhase,
    StartPlayer,
)
from strawberry.session import CommitResult, VersionedRoom


def make_hand(letters: str, active_index: int = 0, word_length: int = 3) -> Hand:
    return Hand(
        letters=tuple(letters),
        guesses=(None,) * word_length,
        active_index=active_index,
    )


class InMemoryTransport:
    """Compare-and-swap room store kept in a dict."""

    def __init__(self):
        self.rooms: dict[str, VersionedRoom] = {}
        self.submissions = 0

    def create(self, room_id: str, state: Room, version: int = 1) -> None:
        self.rooms[room_id] = VersionedRoom(state=state, version=version)

    def fetch_room_state(
        self, room_id: str, known_version: int | None
    ) -> VersionedRoom | None:
        current = self.rooms.get(room_id)
        if current is None or current.version == known_version:
            return None
        return current

    def submit_room_state(
        self, room_id: str, expected_version: int, new_state: Room
    ) -> CommitResult:
        self.submissions += 1
        current = self.rooms[room_id]
        if current.version != expected_version:
            return CommitResult.VERSION_CONFLICT
        self.rooms[room_id] = VersionedRoom(state=new_state, version=expected_version + 1)
        return CommitResult.ACCEPTED


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def start_room() -> StartPhase:
    """Three players, all with five-letter words."""
    return StartPhase(
        word_length=5,
        players=(
            StartPlayer(name="alice", word="HEART"),
            StartPlayer(name="bob", word="PLANT"),
            StartPlayer(name="carol", word="STORM"),
        ),
    )


@pytest.fixture
def hinting_room() -> HintingPhase:
    """Three players with three-letter hands, all on their first card.

    Face-up letters: player 1 'A', player 2 'D', player 3 'G'.
    Dummy 1 shows 'K' (7 uses to go), dummy 2 shows 'L' (free hint on next use).
    """
    return HintingPhase(
        word_length=3,
        players=(
            HintingPlayer(name="alice", hand=make_hand("ABC")),
            HintingPlayer(name="bob", hand=make_hand("DEF")),
            HintingPlayer(name="carol", hand=make_hand("GHI")),
        ),
        dummies=(
            Dummy(current_letter="K", until_free_hint=7),
            Dummy(current_letter="L", until_free_hint=1),
        ),
        bonuses=("S",),
        hints_remaining=11,
    )


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport()
