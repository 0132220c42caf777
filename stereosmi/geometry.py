"""
2-D geometry used to read stereo configuration off a depiction.

The angle conventions here define the canonical stereo order, so the
formulas must not be "simplified": the atan2 difference (and its 2*pi wrap)
is what ties neighbour order to the drawing.

All tests are invariant under rotating the drawing in its plane; mirroring
the drawing inverts them.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Point2D

Point3D = tuple[float, float, float]


def give_angle(origin: Point2D, to1: Point2D, to2: Point2D) -> float:
    """Clockwise angle from origin->to1 round to origin->to2, in [0, 2*pi)."""
    angle = (
        math.atan2(origin[1] - to1[1], origin[0] - to1[0])
        - math.atan2(origin[1] - to2[1], origin[0] - to2[0])
    )
    if angle < 0:
        angle = 2 * math.pi + angle
    return angle


def is_left(where_is: Point2D, view_from: Point2D, view_to: Point2D) -> bool:
    """True if where_is lies left of the directed line view_from -> view_to.

    Sign of the 2-D cross product; points on the line are not left.
    """
    ax, ay = view_from
    bx, by = view_to
    cx, cy = where_is
    return (bx - ax) * (cy - ay) - (by - ay) * (cx - ax) > 0


def lift(origin: Point2D, point: Point2D, depth: int) -> Point3D:
    """Unit bond direction from origin to point, raised out of the plane.

    Args:
        origin: The stereocentre.
        point: A neighbour.
        depth: +1 for a neighbour drawn towards the viewer (wedge), -1 for
            one drawn away (hash), 0 for a plain bond.
    """
    dx = point[0] - origin[0]
    dy = point[1] - origin[1]
    length = math.hypot(dx, dy) or 1.0
    return (dx / length, dy / length, float(depth))


def signed_volume(a: Point3D, b: Point3D, c: Point3D, d: Point3D) -> float:
    """Triple product (b - a) . ((c - a) x (d - a)).

    Positive when b, c, d run clockwise as seen from a, negative when they
    run anticlockwise, zero when the four points are coplanar.
    """
    b0, b1, b2 = b[0] - a[0], b[1] - a[1], b[2] - a[2]
    c0, c1, c2 = c[0] - a[0], c[1] - a[1], c[2] - a[2]
    d0, d1, d2 = d[0] - a[0], d[1] - a[1], d[2] - a[2]
    return (
        b0 * (c1 * d2 - c2 * d1)
        - b1 * (c0 * d2 - c2 * d0)
        + b2 * (c0 * d1 - c1 * d0)
    )
