"""Tests for the grid layout planner."""

import pytest

from netlist_rebuild.config import LayoutConfig
from netlist_rebuild.layout import GridPlanner


class TestGridPlanner:
    """Tests for GridPlanner.position()."""

    def test_first_position_is_origin(self):
        assert GridPlanner().position(0) == (20, 20)

    def test_advances_three_cells_per_component(self):
        planner = GridPlanner(grid_size=100, max_per_row=15)
        assert planner.position(1) == (320, 20)
        assert planner.position(14) == (20 + 14 * 300, 20)

    def test_sixteenth_component_wraps(self):
        planner = GridPlanner(grid_size=100, max_per_row=15)
        assert planner.position(15) == (20, 220)
        assert planner.position(16) == (320, 220)
        assert planner.position(30) == (20, 420)

    def test_small_rows(self):
        planner = GridPlanner(grid_size=10, max_per_row=2)
        positions = [planner.position(i) for i in range(5)]
        assert positions == [(20, 20), (50, 20), (20, 40), (50, 40), (20, 60)]

    def test_custom_origin(self):
        planner = GridPlanner(origin_x=0, origin_y=-50, grid_size=50, max_per_row=1)
        assert planner.position(2) == (0, 150)

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            GridPlanner().position(-1)

    @pytest.mark.parametrize("kwargs", [{"max_per_row": 0}, {"grid_size": 0}, {"grid_size": -5}])
    def test_invalid_grid_rejected(self, kwargs):
        with pytest.raises(ValueError):
            GridPlanner(**kwargs)

    def test_from_config(self):
        layout = LayoutConfig(origin_x=5, origin_y=6, grid_size=7, max_per_row=8)
        planner = GridPlanner.from_config(layout)
        assert planner == GridPlanner(origin_x=5, origin_y=6, grid_size=7, max_per_row=8)
