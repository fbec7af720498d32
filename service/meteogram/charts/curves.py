"""SVG path data for smooth chart lines.

Lines use a monotone cubic interpolation in x: the curve never overshoots
the data between two samples, which keeps e.g. wind speeds from dipping below
zero between hours.
"""

from typing import Iterable

Point = tuple[float, float]


def fmt(v: float) -> str:
    """Formats a coordinate compactly (at most 3 decimals, no trailing zeros)."""
    s = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if s in ("-0", "") else s


def _pt(p: Point) -> str:
    return f"{fmt(p[0])},{fmt(p[1])}"


def _sign(x: float) -> int:
    return -1 if x < 0 else 1


def _dedupe(points: Iterable[Point]) -> list[Point]:
    """Drops consecutive coincident points."""
    result: list[Point] = []
    for p in points:
        if not result or result[-1] != p:
            result.append(p)
    return result


def _interior_tangent(p0: Point, p1: Point, p2: Point) -> float:
    h0 = p1[0] - p0[0]
    h1 = p2[0] - p1[0]
    s0 = (p1[1] - p0[1]) / h0 if h0 else 0.0
    s1 = (p2[1] - p1[1]) / h1 if h1 else 0.0
    p = (s0 * h1 + s1 * h0) / (h0 + h1) if (h0 + h1) else 0.0
    return (_sign(s0) + _sign(s1)) * min(abs(s0), abs(s1), 0.5 * abs(p))


def _end_tangent(p0: Point, p1: Point, t: float) -> float:
    h = p1[0] - p0[0]
    return (3 * (p1[1] - p0[1]) / h - t) / 2 if h else t


def tangents(points: list[Point]) -> list[float]:
    """Returns the monotone tangent (dy/dx) at each of the points (n >= 3)."""
    n = len(points)
    ts = [0.0] * n
    for i in range(1, n - 1):
        ts[i] = _interior_tangent(points[i - 1], points[i], points[i + 1])
    ts[0] = _end_tangent(points[0], points[1], ts[1])
    ts[-1] = _end_tangent(points[-2], points[-1], ts[-2])
    return ts


def _segments(points: list[Point]) -> list[str]:
    """Path commands that continue from points[0] through all other points."""
    if len(points) < 2:
        return []
    if len(points) == 2:
        return [f"L{_pt(points[1])}"]
    ts = tangents(points)
    cmds = []
    for i in range(len(points) - 1):
        (x0, y0), (x1, y1) = points[i], points[i + 1]
        dx = (x1 - x0) / 3
        c1 = (x0 + dx, y0 + dx * ts[i])
        c2 = (x1 - dx, y1 - dx * ts[i + 1])
        cmds.append(f"C{_pt(c1)},{_pt(c2)},{_pt((x1, y1))}")
    return cmds


def line_path(points: Iterable[Point]) -> str:
    """Returns the SVG path data of a monotone-x curve through points."""
    pts = _dedupe(points)
    if not pts:
        return ""
    if len(pts) == 1:
        return f"M{_pt(pts[0])}Z"
    return f"M{_pt(pts[0])}" + "".join(_segments(pts))


def area_path(xs: list[float], y0s: list[float], y1s: list[float]) -> str:
    """Returns the SVG path data of the closed region between two curves.

    The upper edge runs through (xs, y1s) left to right, the lower edge back
    through (xs, y0s) right to left.
    """
    top = _dedupe(zip(xs, y1s))
    bottom = _dedupe(reversed(list(zip(xs, y0s))))
    if not top:
        return ""
    return (
        f"M{_pt(top[0])}"
        + "".join(_segments(top))
        + f"L{_pt(bottom[0])}"
        + "".join(_segments(bottom))
        + "Z"
    )
