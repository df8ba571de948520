"""
Grid layout for rebuilt schematics.

Positions depend only on the attempt index, never on device size or on
whether earlier components resolved, so the same netlist always produces the
same layout.
"""

from __future__ import annotations

from dataclasses import dataclass

# Horizontal pitch between components, in grid cells
COLUMN_PITCH = 3
# Vertical pitch between rows, in grid cells
ROW_PITCH = 2


@dataclass(frozen=True)
class GridPlanner:
    """Row-major grid of component positions.

    Starting at ``(origin_x, origin_y)``, each component is placed
    ``3 * grid_size`` to the right of the previous one. After
    ``max_per_row`` components x returns to ``origin_x`` and y advances by
    ``2 * grid_size``.

    Example::

        planner = GridPlanner(grid_size=100, max_per_row=15)
        planner.position(0)   # (20, 20)
        planner.position(15)  # (20, 220)
    """

    origin_x: float = 20
    origin_y: float = 20
    grid_size: float = 100
    max_per_row: int = 15

    def __post_init__(self):
        if self.max_per_row < 1:
            raise ValueError(f"max_per_row must be at least 1, got {self.max_per_row}")
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")

    def position(self, index: int) -> tuple[float, float]:
        """Position of the ``index``-th attempted placement (zero-based)."""
        if index < 0:
            raise ValueError(f"index must be non-negative, got {index}")
        row, column = divmod(index, self.max_per_row)
        x = self.origin_x + column * COLUMN_PITCH * self.grid_size
        y = self.origin_y + row * ROW_PITCH * self.grid_size
        return (x, y)

    @classmethod
    def from_config(cls, layout) -> GridPlanner:
        """Build a planner from a :class:`~netlist_rebuild.config.LayoutConfig`."""
        return cls(
            origin_x=layout.origin_x,
            origin_y=layout.origin_y,
            grid_size=layout.grid_size,
            max_per_row=layout.max_per_row,
        )
