"""Convex hulls, minimum bounding boxes and segment intersection."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)


def rotate_point(point: Vec2, theta: float, origin: Vec2 | None = None) -> Vec2:
    """Rotate *point* by *theta* radians around *origin* (default: 0, 0)."""
    ox, oy = (origin.x, origin.y) if origin is not None else (0.0, 0.0)
    tx = point.x - ox
    ty = point.y - oy
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return Vec2(tx * cos_t - ty * sin_t + ox, tx * sin_t + ty * cos_t + oy)


def angle_to_x(a: Vec2, b: Vec2) -> float:
    """Angle of the segment from *a* to *b* against the x axis."""
    return math.atan2(b.y - a.y, b.x - a.x)


def convex_hull_orientation(p: Vec2, q: Vec2, r: Vec2) -> int:
    """0 if collinear, 1 if clockwise, 2 if counterclockwise."""
    val = math.trunc((q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y))
    if val == 0:
        return 0
    return 1 if val > 0 else 2


def convex_hull(points: list[Vec2]) -> list[Vec2]:
    """Gift-wrapping hull of *points*; empty if fewer than three."""
    count = len(points)
    if count < 3:
        return []
    leftmost = 0
    for index, point in enumerate(points):
        if point.x < points[leftmost].x:
            leftmost = index
    hull: list[Vec2] = []
    p = leftmost
    while True:
        hull.append(points[p])
        q = (p + 1) % count
        for index, point in enumerate(points):
            if convex_hull_orientation(points[p], point, points[q]) == 2:
                q = index
        p = q
        if p == leftmost or len(hull) >= count:
            break
    return hull


def tighten_hull(hull: list[Vec2], threshold: float) -> list[Vec2]:
    """Drop hull points where the outline bends by less than *threshold*."""
    points = list(hull)
    n = len(points)
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        c = points[(i + 2) % n]
        if abs(angle_to_x(a, b) - angle_to_x(b, c)) < threshold:
            points[(i + 1) % n] = a
    if not points:
        return []
    following = points[1:] + points[:1]
    return [point for point, nxt in zip(points, following) if point != nxt]


def minimum_bounding_box(hull: list[Vec2], pin_size: float) -> list[Vec2]:
    """The four corners of the smallest rotated box around *hull*, grown by *pin_size*."""
    big = sys.float_info.max
    tiny = sys.float_info.min
    origin = Vec2(
        min((p.x for p in hull), default=big),
        min((p.y for p in hull), default=big),
    )
    work = [p - origin for p in hull]

    best_area = math.inf
    best_angle = 0.0
    cumulative_angle = 0.0
    low = Vec2()
    high = Vec2()
    count = len(work)
    for i in range(count):
        angle = angle_to_x(work[i], work[(i + 1) % count])
        cumulative_angle += angle
        work = [rotate_point(p, -angle) for p in work]
        top = max([tiny] + [p.y for p in work])
        right = max([tiny] + [p.x for p in work])
        bottom = min([big] + [p.y for p in work])
        left = min([big] + [p.x for p in work])
        area = (right - left) * (top - bottom)
        if area < best_area:
            best_area = area
            best_angle = cumulative_angle
            low = Vec2(left, bottom)
            high = Vec2(right, top)

    low = Vec2(low.x - pin_size, low.y - pin_size)
    high = Vec2(high.x + pin_size, high.y + pin_size)
    corners = [low, Vec2(high.x, low.y), high, Vec2(low.x, high.y)]
    return [rotate_point(corner, best_angle) + origin for corner in corners]


def get_intersection(p0: Vec2, p1: Vec2, p2: Vec2, p3: Vec2) -> Vec2 | None:
    """Where segment p0-p1 crosses segment p2-p3, or None."""
    s1 = p1 - p0
    s2 = p3 - p2
    denom = -s2.x * s1.y + s1.x * s2.y
    if denom == 0:
        return None
    s = (-s1.y * (p0.x - p2.x) + s1.x * (p0.y - p2.y)) / denom
    t = (s2.x * (p0.y - p2.y) - s2.y * (p0.x - p2.x)) / denom
    if 0 <= s <= 1 and 0 <= t <= 1:
        return Vec2(p0.x + t * s1.x, p0.y + t * s1.y)
    return None