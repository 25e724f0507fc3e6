"""Letters, letter sources and hints.

A hint is a list of letters, each tagged with where it came from: another
player's face-up card, a dummy pile, the shared bonus pool, or the wildcard.
The same source classes describe the letters a player claims in the endgame.
"""

import random
from dataclasses import dataclass, field
from enum import StrEnum

# No J, Q, V, X, Z
LETTERS: tuple[str, ...] = tuple("ABCDEFGHIKLMNOPRSTUWY")

WILDCARD = "*"


class LetterSource(StrEnum):
    PLAYER = "player"
    DUMMY = "dummy"
    BONUS = "bonus"
    WILDCARD = "wildcard"


@dataclass(frozen=True)
class PlayerLetter:
    """The face-up letter in front of another player."""

    letter: str
    player_number: int
    source_type: LetterSource = field(default=LetterSource.PLAYER, init=False)


@dataclass(frozen=True)
class DummyLetter:
    """The current letter of a dummy pile (1-based dummy number)."""

    letter: str
    dummy_number: int
    source_type: LetterSource = field(default=LetterSource.DUMMY, init=False)


@dataclass(frozen=True)
class BonusLetter:
    """A letter from the shared bonus pool."""

    letter: str
    source_type: LetterSource = field(default=LetterSource.BONUS, init=False)


@dataclass(frozen=True)
class WildcardLetter:
    letter: str = field(default=WILDCARD, init=False)
    source_type: LetterSource = field(default=LetterSource.WILDCARD, init=False)


@dataclass(frozen=True)
class HandSlot:
    """One position of a player's own hand, claimed during the endgame."""

    index: int
    source_type: LetterSource = field(default=LetterSource.PLAYER, init=False)


LetterAndSource = PlayerLetter | DummyLetter | BonusLetter | WildcardLetter
EndgameLetterChoice = HandSlot | WildcardLetter | BonusLetter


@dataclass(frozen=True)
class Hint:
    """A hint as given by one player. Order is display order only."""

    given_by_player: int
    letters_and_sources: tuple[LetterAndSource, ...] = ()

    @property
    def text(self) -> str:
        return "".join(las.letter for las in self.letters_and_sources)


@dataclass(frozen=True)
class HintSpecs:
    """Summary of a hint: its length and how many distinct sources it uses."""

    length: int
    players: int
    wildcard: bool
    dummies: int
    bonuses: int


def random_letter(rng: random.Random) -> str:
    """Draw one letter uniformly from the alphabet."""
    return rng.choice(LETTERS)
