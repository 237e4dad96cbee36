"""3D point and color helpers operating on plain float tuples."""
from __future__ import annotations

import math

from redlight.types import Color, Point3

ZERO: Point3 = (0.0, 0.0, 0.0)
UP: Point3 = (0.0, 1.0, 0.0)
DOWN: Point3 = (0.0, -1.0, 0.0)
FORWARD: Point3 = (0.0, 0.0, 1.0)
RIGHT: Point3 = (1.0, 0.0, 0.0)


def sub(a: Point3, b: Point3) -> Point3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Point3, s: float) -> Point3:
    return (v[0] * s, v[1] * s, v[2] * s)


def dot(a: Point3, b: Point3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Point3, b: Point3) -> Point3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def magnitude(v: Point3) -> float:
    return math.sqrt(dot(v, v))


def normalize_or(v: Point3, fallback: Point3, eps: float = 1e-3) -> Point3:
    """Unit vector along ``v``, or ``fallback`` when ``v`` is shorter than ``eps``."""
    mag = magnitude(v)
    if mag <= eps:
        return fallback
    return scale(v, 1.0 / mag)


def flatten(v: Point3) -> Point3:
    """Drop the vertical component."""
    return (v[0], 0.0, v[2])


def sign(x: float) -> float:
    if x > 0.0:
        return 1.0
    if x < 0.0:
        return -1.0
    return 0.0


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_color(a: Color, b: Color, t: float) -> Color:
    return (lerp(a[0], b[0], t), lerp(a[1], b[1], t), lerp(a[2], b[2], t))


def clamp01(t: float) -> float:
    return max(0.0, min(1.0, t))
