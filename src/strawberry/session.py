"""Session layer bridging the room engine and a versioned room store.

The store itself (a server, a database, a test double) is whatever
implements RoomTransport. Commits are optimistic: the new state is computed
locally from the last fetched state and submitted with that state's version.
The store accepts it only if nobody else has committed in between.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol

from .engine.state import Room
from .errors import Rejected, StrawberryError
from .logging import get_logger, room_context

logger = get_logger(__name__)


class CommitResult(StrEnum):
    ACCEPTED = "accepted"
    VERSION_CONFLICT = "version_conflict"
    # The mutation produced the state we already had; nothing was submitted.
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class VersionedRoom:
    state: Room
    version: int


class RoomTransport(Protocol):
    def fetch_room_state(
        self, room_id: str, known_version: int | None
    ) -> VersionedRoom | None:
        """Latest state if its version differs from known_version, else None.

        A known_version of None asks for whatever is stored.
        """
        ...

    def submit_room_state(
        self, room_id: str, expected_version: int, new_state: Room
    ) -> CommitResult:
        """Store new_state iff the stored version is still expected_version.

        An accepted state is stored as version expected_version + 1.
        """
        ...


class RoomNotFoundError(StrawberryError):
    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found")


class RoomSession:
    """Holds the latest known state of one room and commits changes to it."""

    def __init__(self, transport: RoomTransport, room_id: str, current: VersionedRoom):
        self.transport = transport
        self.room_id = room_id
        self.current = current

    @classmethod
    def load(cls, transport: RoomTransport, room_id: str) -> "RoomSession":
        """Fetch the room's current state."""
        current = transport.fetch_room_state(room_id, None)
        if current is None:
            raise RoomNotFoundError(room_id)
        logger.debug("room_loaded", room_id=room_id, version=current.version)
        return cls(transport, room_id, current)

    @property
    def state(self) -> Room:
        return self.current.state

    @property
    def version(self) -> int:
        return self.current.version

    def refresh(self) -> bool:
        """Pull a newer state if there is one. Returns True if it changed."""
        latest = self.transport.fetch_room_state(self.room_id, self.current.version)
        if latest is None:
            return False
        self.current = latest
        return True

    def commit(
        self, mutator: Callable[..., Room | Rejected], *args: Any, **kwargs: Any
    ) -> CommitResult | Rejected:
        """Apply an engine transition to the current state and submit it once.

        Engine errors propagate and nothing is submitted. On a version
        conflict the session refreshes so the caller can decide whether to
        recompute; it never retries by itself.
        """
        mutation = getattr(mutator, "__name__", repr(mutator))
        with room_context(self.room_id, self.current.version):
            new_state = mutator(self.current.state, *args, **kwargs)
            if isinstance(new_state, Rejected):
                return new_state
            if new_state == self.current.state:
                return CommitResult.UNCHANGED

            result = self.transport.submit_room_state(
                self.room_id, self.current.version, new_state
            )
            if result is CommitResult.ACCEPTED:
                logger.debug("commit_accepted", mutation=mutation)
                self.current = VersionedRoom(
                    state=new_state, version=self.current.version + 1
                )
            else:
                logger.warning("commit_conflict", mutation=mutation)
                self.refresh()
        return result
