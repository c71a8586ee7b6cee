"""Unit tests for src/services/registry.py"""

import pytest

from src.core.exceptions import RoomFullError
from src.core.shared_types import Side
from src.services.registry import ConnectionRegistry


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


def test_sides_assigned_in_connection_order(registry: ConnectionRegistry) -> None:
    assert registry.register("first") == Side.BLACK
    assert registry.register("second") == Side.WHITE
    assert registry.connections() == ["first", "second"]
    assert len(registry) == 2
    assert registry.is_full()


def test_third_connection_refused(registry: ConnectionRegistry) -> None:
    registry.register("first")
    registry.register("second")
    with pytest.raises(RoomFullError):
        registry.register("third")

    # existing slots unaffected
    assert registry.side_of("first") == Side.BLACK
    assert registry.side_of("second") == Side.WHITE
    assert registry.side_of("third") is None


def test_register_twice_keeps_side(registry: ConnectionRegistry) -> None:
    registry.register("first")
    assert registry.register("first") == Side.BLACK
    assert len(registry) == 1


def test_unregister_frees_slot(registry: ConnectionRegistry) -> None:
    registry.register("first")
    registry.register("second")

    assert registry.unregister("first") == Side.BLACK
    assert not registry.is_full()
    assert registry.connections() == ["second"]

    # the freed side is handed to the next connection
    assert registry.register("third") == Side.BLACK
    assert registry.connections() == ["third", "second"]


def test_unregister_unknown_connection(registry: ConnectionRegistry) -> None:
    assert registry.unregister("nobody") is None
    assert len(registry) == 0


def test_capacity(registry: ConnectionRegistry) -> None:
    assert registry.capacity == 2
