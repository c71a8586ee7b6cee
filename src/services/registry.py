"""Participant slots: which connection plays which side."""

from typing import Optional

from src.core.exceptions import RoomFullError
from src.core.shared_types import Side

ConnectionId = str

# Slots are handed out in this order: the first participant plays black
SLOT_ORDER: tuple[Side, ...] = (Side.BLACK, Side.WHITE)


class ConnectionRegistry:
    """Tracks up to two participants. Assignment order = connection order, a slot gets freed on disconnect."""

    def __init__(self) -> None:
        self._slots: dict[Side, ConnectionId] = {}

    @property
    def capacity(self) -> int:
        return len(SLOT_ORDER)

    def __len__(self) -> int:
        return len(self._slots)

    def is_full(self) -> bool:
        return len(self._slots) >= self.capacity

    def register(self, connection_id: ConnectionId) -> Side:
        """Assign the first free side to the connection."""
        existing = self.side_of(connection_id)
        if existing is not None:
            return existing

        free_side = next((side for side in SLOT_ORDER if side not in self._slots), None)
        if free_side is None:
            raise RoomFullError(
                f"Cannot register {connection_id}. Both sides are already taken."
            )
        self._slots[free_side] = connection_id
        return free_side

    def unregister(self, connection_id: ConnectionId) -> Optional[Side]:
        """Free the slot held by the connection (if any). Returns the side it played."""
        side = self.side_of(connection_id)
        if side is not None:
            del self._slots[side]
        return side

    def side_of(self, connection_id: ConnectionId) -> Optional[Side]:
        return next(
            (side for side, holder in self._slots.items() if holder == connection_id),
            None,
        )

    def connections(self) -> list[ConnectionId]:
        """Registered connections, black first."""
        return [self._slots[side] for side in SLOT_ORDER if side in self._slots]
