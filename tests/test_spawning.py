"""Tests for spawn planning."""

import pytest
from py_cavegen.core.errors import CaveConfigurationError
from py_cavegen.core.grid import Coord
from py_cavegen.core.rooms import Room
from py_cavegen.core.spawning import SpawnPlanner


def make_room(x0, count, main=False):
    tiles = [Coord(x0 + i % 10, i // 10) for i in range(count)]
    return Room(tiles=tiles, is_main_room=main, is_accessible_from_main_room=True)


class TestSpawnPlanner:
    """Test player and enemy placement."""

    @pytest.fixture
    def rooms(self):
        return [make_room(0, 150, main=True), make_room(20, 150), make_room(40, 50)]

    @pytest.fixture
    def planner(self):
        return SpawnPlanner(60, 20, spawn_seed="1234", spawn_height=1.0)

    def test_enemy_counts_round_up(self, planner, rooms):
        plan = planner.plan(rooms)
        assert plan.enemy_count == 3
        assert [enemy.room_index for enemy in plan.enemies] == [1, 1, 2]

    def test_player_in_main_room(self, planner, rooms):
        plan = planner.plan(rooms)
        assert plan.player.room_index == 0
        assert plan.player.tile in rooms[0].tiles
        assert plan.player.position[1] == 1.0

    def test_enemies_inside_their_rooms(self, planner, rooms):
        plan = planner.plan(rooms)
        for enemy in plan.enemies:
            assert enemy.tile in rooms[enemy.room_index].tiles

    def test_positions_match_world_transform(self, planner, rooms):
        plan = planner.plan(rooms)
        tile = plan.player.tile
        assert plan.player.position == (-30 + 0.5 + tile.x, 1.0, -10 + 0.5 + tile.y)

    def test_deterministic(self, planner, rooms):
        assert planner.plan(rooms) == planner.plan(rooms)

    def test_single_room_has_no_enemies(self, planner):
        plan = planner.plan([make_room(0, 80, main=True)])
        assert plan.enemies == []

    def test_main_room_required_first(self, planner, rooms):
        with pytest.raises(CaveConfigurationError):
            planner.plan(rooms[1:])
        with pytest.raises(CaveConfigurationError):
            planner.plan([])

    def test_invalid_divisor(self):
        with pytest.raises(CaveConfigurationError):
            SpawnPlanner(10, 10, tiles_per_enemy=0)
