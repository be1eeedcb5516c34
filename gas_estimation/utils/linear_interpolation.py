from typing import Sequence, Tuple


def interpolate(x: float, points: Sequence[Tuple[float, float]]) -> float:
    """
    Piecewise linear interpolation over points sorted by x.
    Values outside of the range are clamped to the first or the last point.

    Args:
        x:float: Point to interpolate at, e.g. time limit in seconds
        points:Sequence[Tuple[float, float]]: (x, y) pairs sorted by x ascending

    Returns:
        Interpolated y
    """
    if not points:
        raise ValueError('At least one point is required for interpolation')
    first_x, first_y = points[0]
    if x <= first_x:
        return first_y
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        if x <= x1:
            if x1 == x0:
                return y1
            return y0 + (y1 - y0) * (x - x0) / (x1 - x0)
    return points[-1][1]
