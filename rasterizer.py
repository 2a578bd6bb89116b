import math


def bresenham_line(x0, y0, x1, y1):
    """Integer Bresenham line from (x0, y0) to (x1, y1), both ends included.

    Endpoints are normalized so x always increases along the run (and the
    axes are swapped for lines steeper than 45 degrees), which makes the
    result independent of the order the endpoints are given in.
    """
    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    derror2 = abs(y1 - y0) * 2
    y_step = 1 if y1 > y0 else -1
    error2 = 0
    y = y0

    line = []
    for x in range(x0, x1 + 1):
        line.append((y, x) if steep else (x, y))
        error2 += derror2
        if error2 > dx:
            y += y_step
            error2 -= dx * 2
    return line


def trace(start, end, grid):
    """Cells touched by a straight stroke between two screen points.

    Both points are mapped into the grid's cell space and snapped to the
    cell they fall in before the line is stepped, so the first and last
    cells are always the ones under the pointer. Returns (row, col) pairs;
    they are not clipped to the visible extent.
    """
    gx0, gy0 = grid.to_grid_space(start)
    gx1, gy1 = grid.to_grid_space(end)

    line = bresenham_line(
        math.floor(gx0), math.floor(gy0), math.floor(gx1), math.floor(gy1)
    )
    return [(y, x) for x, y in line]
