import numpy
import pytest

from pixel_grid import Cell, FillRect, Grid, GridStroke, LineSegment
from utilities import BLACK, WHITE

RED = (255, 0, 0, 255)


def make_grid(rows=5, cols=5, anchor=(0.0, 0.0), cell_width=10.0, cell_height=10.0):
    return Grid(
        max_rows=rows,
        max_cols=cols,
        anchor=anchor,
        cell_width=cell_width,
        cell_height=cell_height,
        visible_rows=rows,
        visible_cols=cols,
    )


class TestConstruction:
    def test_visible_extent_defaults_to_half_capacity(self):
        grid = Grid(200, 100)
        assert (grid.visible_rows, grid.visible_cols) == (100, 50)

    def test_tiny_capacity_keeps_one_visible_cell(self):
        grid = Grid(1, 1)
        assert (grid.visible_rows, grid.visible_cols) == (1, 1)

    def test_requested_extent_is_clamped(self):
        grid = Grid(4, 6, visible_rows=10, visible_cols=0)
        assert (grid.visible_rows, grid.visible_cols) == (4, 1)

    def test_all_cells_start_white(self):
        grid = make_grid(3, 4)
        assert grid.cells.shape == (3, 4, 4)
        assert (grid.cells == numpy.array(WHITE, dtype=numpy.uint8)).all()

    @pytest.mark.parametrize("rows, cols", [(0, 5), (5, 0), (-1, 3)])
    def test_rejects_empty_capacity(self, rows, cols):
        with pytest.raises(ValueError):
            Grid(rows, cols)

    @pytest.mark.parametrize(
        "width, height", [(0.0, 10.0), (10.0, -1.0), (float("nan"), 10.0)]
    )
    def test_rejects_non_positive_cell_size(self, width, height):
        with pytest.raises(ValueError):
            Grid(5, 5, cell_width=width, cell_height=height)


class TestContainment:
    @pytest.mark.parametrize(
        "point, expected",
        [
            ((20.0, 30.0), True),
            ((20.0 + 40.0 - 0.001, 30.0 + 15.0 - 0.001), True),
            ((20.0 + 40.0, 35.0), False),
            ((25.0, 30.0 + 15.0), False),
            ((19.999, 35.0), False),
            ((25.0, 29.999), False),
            ((-100.0, -100.0), False),
        ],
    )
    def test_half_open_rectangle(self, point, expected):
        # 3 rows of 5.0 and 4 cols of 10.0 anchored at (20, 30)
        grid = make_grid(3, 4, anchor=(20.0, 30.0), cell_width=10.0, cell_height=5.0)
        assert grid.contains(point) is expected

    def test_only_visible_extent_counts(self):
        grid = make_grid(10, 10)
        grid.resize(2, 3)
        assert grid.contains((29.0, 19.0))
        assert not grid.contains((31.0, 5.0))
        assert not grid.contains((5.0, 21.0))

    def test_follows_pan(self):
        grid = make_grid(2, 2)
        grid.pan(100.0, 50.0)
        assert not grid.contains((5.0, 5.0))
        assert grid.contains((105.0, 55.0))


class TestCoordinateMapping:
    def test_every_cell_origin_maps_back_to_itself(self):
        grid = make_grid(6, 7, anchor=(12.5, -40.0), cell_width=8.0, cell_height=6.25)
        for row in range(grid.visible_rows):
            for col in range(grid.visible_cols):
                assert grid.to_cell(grid.cell_origin(row, col)) == (row, col)

    def test_points_inside_a_cell_share_it(self):
        grid = make_grid()
        assert grid.to_cell((22.0, 22.0)) == (2, 2)
        assert grid.to_cell((29.99, 20.0)) == (2, 2)
        assert grid.to_cell((42.0, 2.0)) == (0, 4)

    @pytest.mark.parametrize(
        "point", [(-0.5, 5.0), (5.0, -0.5), (50.0, 5.0), (5.0, 50.0), (-15.0, -15.0)]
    )
    def test_outside_points_have_no_cell(self, point):
        assert make_grid().to_cell(point) is None

    @pytest.mark.parametrize(
        "point",
        [(float("nan"), 5.0), (5.0, float("inf")), (float("-inf"), float("nan"))],
    )
    def test_non_finite_points_have_no_cell(self, point):
        assert make_grid().to_cell(point) is None

    def test_grid_space_is_fractional(self):
        grid = make_grid(anchor=(10.0, 20.0), cell_width=4.0, cell_height=8.0)
        assert grid.to_grid_space((16.0, 16.0)) == pytest.approx((1.5, -0.5))

    def test_cell_origin(self):
        grid = make_grid(anchor=(3.0, 4.0), cell_width=2.0, cell_height=5.0)
        assert grid.cell_origin(2, 3) == pytest.approx((9.0, 14.0))


class TestCells:
    def test_set_and_get_cell(self):
        grid = make_grid()
        grid.set_cell(1, 3, RED)
        assert grid.get_cell(1, 3) == RED
        assert grid.get_cell(3, 1) == WHITE

    def test_set_cell_accepts_hex(self):
        grid = make_grid()
        grid.set_cell(0, 0, "#ff0000")
        assert grid.get_cell(0, 0) == RED

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (5, 0), (0, 5), (99, 99)])
    def test_set_cell_outside_visible_range_is_ignored(self, row, col):
        grid = make_grid()
        before = grid.cells.copy()
        grid.set_cell(row, col, RED)
        assert (grid.cells == before).all()
        assert grid.get_cell(row, col) is None

    def test_set_cell_skips_capacity_outside_visible_extent(self):
        grid = make_grid(4, 4)
        grid.resize(2, 2)
        grid.set_cell(3, 3, RED)
        assert tuple(grid.cells[3, 3]) == WHITE

    def test_cell_handle_reads_and_writes_arena(self):
        grid = make_grid()
        cell = grid.cell(4, 4)
        assert isinstance(cell, Cell)
        cell.color = (1, 2, 3)
        assert grid.get_cell(4, 4) == (1, 2, 3, 255)
        assert cell.render(0.0, 0.0, 10.0, 10.0) == FillRect(
            0.0, 0.0, 10.0, 10.0, (1, 2, 3, 255)
        )

    def test_cell_handle_outside_capacity_raises(self):
        with pytest.raises(IndexError):
            make_grid().cell(5, 0)


class TestClearAndResize:
    def test_clear_whitens_every_visible_cell(self):
        grid = make_grid(3, 3)
        for row in range(3):
            for col in range(3):
                grid.set_cell(row, col, RED)
        grid.clear()
        for row in range(3):
            for col in range(3):
                assert grid.get_cell(row, col) == WHITE

    def test_clear_keeps_cells_outside_visible_extent(self):
        grid = make_grid(4, 4)
        grid.set_cell(3, 3, RED)
        grid.resize(2, 2)
        grid.clear()
        grid.resize(4, 4)
        assert grid.get_cell(3, 3) == RED

    def test_shrinking_never_discards_content(self):
        grid = make_grid(4, 4)
        grid.set_cell(3, 0, BLACK)
        grid.resize(1, 1)
        grid.resize(4, 4)
        assert grid.get_cell(3, 0) == BLACK

    @pytest.mark.parametrize(
        "requested, expected", [((0, 0), (1, 1)), ((-3, 2), (1, 2)), ((9, 12), (4, 4))]
    )
    def test_resize_is_clamped_to_capacity(self, requested, expected):
        grid = make_grid(4, 4)
        grid.resize(*requested)
        assert (grid.visible_rows, grid.visible_cols) == expected

    @pytest.mark.parametrize(
        "requested, expected",
        [
            ((float("nan"), 2), (3, 2)),
            ((float("inf"), 1), (3, 1)),
            ((2, float("-inf")), (2, 3)),
        ],
    )
    def test_non_finite_resize_keeps_current_extent(self, requested, expected):
        grid = make_grid(4, 4)
        grid.resize(3, 3)
        grid.resize(*requested)
        assert (grid.visible_rows, grid.visible_cols) == expected


class TestGeometry:
    def test_pan_moves_anchor_without_bounds(self):
        grid = make_grid()
        grid.pan(-1000.0, 25.5)
        grid.pan(3.0, -0.5)
        assert grid.anchor == pytest.approx((-997.0, 25.0))

    @pytest.mark.parametrize(
        "dx, dy", [(float("nan"), 0.0), (0.0, float("inf")), (float("-inf"), 1.0)]
    )
    def test_non_finite_pan_is_ignored(self, dx, dy):
        grid = make_grid(anchor=(4.0, 8.0))
        grid.pan(dx, dy)
        assert grid.anchor == (4.0, 8.0)

    def test_set_cell_size(self):
        grid = make_grid()
        grid.set_cell_size(20.0, 4.0)
        assert (grid.cell_width, grid.cell_height) == (20.0, 4.0)
        assert grid.to_cell((41.0, 5.0)) == (1, 2)

    @pytest.mark.parametrize(
        "width, height", [(0.0, 5.0), (5.0, -2.0), (float("inf"), 5.0), (None, 5.0)]
    )
    def test_invalid_cell_size_is_ignored(self, width, height):
        grid = make_grid()
        grid.set_cell_size(width, height)
        assert (grid.cell_width, grid.cell_height) == (10.0, 10.0)


class TestRender:
    def test_rects_then_lines(self):
        grid = make_grid(2, 3, anchor=(5.0, 7.0))
        grid.set_cell(1, 2, RED)
        stroke = GridStroke(1.0, BLACK)

        items = grid.render(stroke)

        rects = [item for item in items if isinstance(item, FillRect)]
        lines = [item for item in items if isinstance(item, LineSegment)]
        assert len(rects) == 6
        assert len(lines) == (3 + 1) + (2 + 1)
        assert items[:6] == rects
        assert rects[0] == FillRect(5.0, 7.0, 10.0, 10.0, WHITE)
        assert rects[-1] == FillRect(25.0, 17.0, 10.0, 10.0, RED)

    def test_vertical_lines_come_before_horizontal(self):
        grid = make_grid(2, 3)
        lines = grid.grid_lines(GridStroke(2.0, BLACK))
        vertical, horizontal = lines[:4], lines[4:]
        assert [line.start for line in vertical] == [
            (0.0, 0.0),
            (10.0, 0.0),
            (20.0, 0.0),
            (30.0, 0.0),
        ]
        assert all(line.end[1] == 20.0 for line in vertical)
        assert [line.start for line in horizontal] == [(0.0, 0.0), (0.0, 10.0), (0.0, 20.0)]
        assert all(line.end[0] == 30.0 for line in horizontal)
        assert all(line.width == 2.0 and line.color == BLACK for line in lines)

    def test_render_only_covers_visible_extent_and_does_not_mutate(self):
        grid = make_grid(6, 6)
        grid.resize(2, 2)
        before = grid.cells.copy()
        items = grid.render()
        assert len([item for item in items if isinstance(item, FillRect)]) == 4
        assert (grid.cells == before).all()

    def test_to_array_is_a_copy_of_visible_extent(self):
        grid = make_grid(4, 5)
        grid.resize(2, 3)
        grid.set_cell(1, 2, RED)
        array = grid.to_array()
        assert array.shape == (2, 3, 4)
        assert tuple(array[1, 2]) == RED
        array[0, 0] = (0, 0, 0, 0)
        assert grid.get_cell(0, 0) == WHITE
