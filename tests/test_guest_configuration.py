"""Unit tests for guest counters and room capacity."""

import pytest

from src.models.booking import (
    GuestCategory,
    GuestConfiguration,
    GuestLimits,
    RoomSelection,
)
from src.models.field_error import ErrorKind
from src.rules import GuestConfigurator, RoomSelector


class TestGuestConfigurator:
    """Tests for bounded counter adjustments."""

    def test_increment_adults(self):
        config = GuestConfigurator.adjust(GuestConfiguration(), GuestCategory.ADULTS, 1)

        assert config.adults == 3
        assert config.children == 0
        assert config.rooms == 1

    @pytest.mark.parametrize(
        "config,category,delta",
        [
            (GuestConfiguration(adults=1), GuestCategory.ADULTS, -1),
            (GuestConfiguration(adults=8), GuestCategory.ADULTS, 1),
            (GuestConfiguration(children=0), GuestCategory.CHILDREN, -1),
            (GuestConfiguration(children=4), GuestCategory.CHILDREN, 1),
            (GuestConfiguration(rooms=1), GuestCategory.ROOMS, -1),
            (GuestConfiguration(rooms=5), GuestCategory.ROOMS, 1),
        ],
    )
    def test_out_of_bounds_is_noop(self, config, category, delta):
        """Test that floor and ceiling adjustments leave the value unchanged."""
        assert GuestConfigurator.adjust(config, category, delta) == config

    def test_invalid_delta(self):
        """Test that only single steps are accepted."""
        with pytest.raises(ValueError):
            GuestConfigurator.adjust(GuestConfiguration(), GuestCategory.ADULTS, 2)

    def test_custom_limits(self):
        limits = GuestLimits(max_adults=3)
        config = GuestConfiguration(adults=3)

        assert GuestConfigurator.adjust(config, GuestCategory.ADULTS, 1, limits).adults == 3

    def test_bounds_hold_for_any_sequence(self):
        """Test that every reachable configuration stays inside the bounds."""
        moves = [(category, 1) for category in GuestCategory] * 10 + [
            (category, -1) for category in GuestCategory
        ] * 10
        config = GuestConfiguration()
        limits = GuestLimits()

        for category, delta in moves:
            config = GuestConfigurator.adjust(config, category, delta, limits)
            for checked in GuestCategory:
                floor, ceiling = limits.bounds(checked)
                assert floor <= config.count(checked) <= ceiling

    def test_capacity_exceeded(self, deluxe_room):
        """Test three guests in one two-person room."""
        error = GuestConfigurator.check_capacity(GuestConfiguration(adults=3), deluxe_room)

        assert error is not None
        assert error.kind == ErrorKind.INPUT_REJECTED
        assert error.code == "capacity_exceeded"

    def test_capacity_with_extra_room(self, deluxe_room):
        config = GuestConfiguration(adults=3, children=1, rooms=2)

        assert GuestConfigurator.check_capacity(config, deluxe_room) is None


class TestRoomSelector:
    """Tests for the multi-room picker."""

    def test_add_room_defaults(self, rooms):
        selection = RoomSelector.add_room(RoomSelection(), rooms["family-suite"])

        entry = selection.find("family-suite")
        assert entry.quantity == 1
        assert entry.adults == 1
        assert entry.children == 0

    def test_add_same_room_increments_quantity(self, rooms):
        selection = RoomSelector.add_room(RoomSelection(), rooms["deluxe-king"])
        selection = RoomSelector.add_room(selection, rooms["deluxe-king"])

        assert len(selection.entries) == 1
        assert selection.total_rooms == 2

    def test_total_rooms_capped(self, rooms):
        """Test that the room ceiling applies across room types."""
        selection = RoomSelection()
        for _ in range(4):
            selection = RoomSelector.add_room(selection, rooms["deluxe-king"])
        selection = RoomSelector.add_room(selection, rooms["family-suite"])
        selection = RoomSelector.add_room(selection, rooms["single-studio"])

        assert selection.total_rooms == 5
        assert selection.find("single-studio") is None

    def test_quantity_floor(self, rooms):
        selection = RoomSelector.add_room(RoomSelection(), rooms["deluxe-king"])
        selection = RoomSelector.update_quantity(selection, "deluxe-king", -1)

        assert selection.find("deluxe-king").quantity == 1

    def test_update_guests_clamped_to_room_limits(self, rooms):
        """Test that adults and children are clamped per room."""
        selection = RoomSelector.add_room(RoomSelection(), rooms["family-suite"])
        selection = RoomSelector.update_guests(selection, "family-suite", adults=5, children=5)

        entry = selection.find("family-suite")
        assert entry.adults == 2
        assert entry.children == 2

    def test_child_limit_defaults_from_max_guests(self, rooms):
        """Test child limit of max_guests - 1 when the room has none."""
        assert rooms["deluxe-king"].child_limit == 1
        assert rooms["single-studio"].child_limit == 0

    def test_update_guests_over_capacity_unchanged(self, rooms):
        """Test that a pair over the per-room capacity is not stored."""
        selection = RoomSelector.add_room(RoomSelection(), rooms["deluxe-king"])
        selection = RoomSelector.update_guests(selection, "deluxe-king", adults=2, children=1)

        entry = selection.find("deluxe-king")
        assert (entry.adults, entry.children) == (1, 0)

    def test_remove_room(self, rooms):
        selection = RoomSelector.add_room(RoomSelection(), rooms["deluxe-king"])
        selection = RoomSelector.add_room(selection, rooms["family-suite"])
        selection = RoomSelector.remove_room(selection, "deluxe-king")

        assert [entry.room.id for entry in selection.entries] == ["family-suite"]

    def test_totals(self, rooms):
        selection = RoomSelector.add_room(RoomSelection(), rooms["deluxe-king"])
        selection = RoomSelector.update_quantity(selection, "deluxe-king", 1)
        selection = RoomSelector.add_room(selection, rooms["family-suite"])
        selection = RoomSelector.update_guests(selection, "family-suite", adults=2, children=1)

        assert selection.total_rooms == 3
        assert selection.total_guests == 1 * 2 + 3
        assert selection.nightly_rate == 100 * 2 + 250
        assert RoomSelector.capacity_errors(selection) == []
