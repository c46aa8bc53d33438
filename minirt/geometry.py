"""Ray intersection with the primitive objects of a scene."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field, replace

from minirt.scene import Cylinder, Plane, Rgb, Sphere, Square, Triangle
from minirt.vector import Vector, unit_axis

# Offset added to plane hits so the point sits just off the surface.
FLT_EPSILON = 1.1920928955078125e-07


@dataclass
class Ray:
    """A ray being traced.

    ``origin`` is the zero vector for rays cast from the camera, in which case
    the camera position (``eye``) is used as the start point and hits are
    only accepted when nearer than ``t``. Any other origin marks a shadow ray,
    which starts at ``origin`` and ignores ``t`` when testing hits.
    """

    direction: Vector
    origin: Vector = field(default_factory=Vector)
    t: float = sys.float_info.max


@dataclass(frozen=True)
class Hit:
    """What a primary ray struck: where, the surface normal and its colour."""

    point: Vector
    normal: Vector
    rgb: Rgb


@dataclass(frozen=True)
class PlaneCut:
    """A ray meeting the plane through ``point`` with normal ``normal``.

    ``den`` is normal·direction, ``num`` is normal·(start - point); ``p`` is
    the point struck once it has been computed.
    """

    point: Vector
    normal: Vector
    den: float
    num: float
    p: Vector | None = None


def _is_primary(ray: Ray) -> bool:
    return ray.origin.is_zero()


def _start(ray: Ray, eye: Vector) -> Vector:
    return eye if _is_primary(ray) else ray.origin


def _facing(cut: PlaneCut) -> PlaneCut:
    """The cut with its normal turned to face the incoming ray."""
    if cut.den > 0:
        return replace(cut, normal=-1 * cut.normal)
    return cut


def plane_intersection(
    ray: Ray, eye: Vector, point: Vector, normal: Vector
) -> PlaneCut | None:
    """The cut of the ray with a plane, or None if the ray never reaches it."""
    po = _start(ray, eye) - point
    den = normal.dot(ray.direction)
    if den:
        num = normal.dot(po)
        if num * den < 0:
            return PlaneCut(point=point, normal=normal, den=den, num=num)
    return None


def plane_point(ray: Ray, eye: Vector, cut: PlaneCut) -> PlaneCut | None:
    """Locate the point struck on the plane, updating ``ray.t``.

    Returns None when a primary ray already has a nearer hit.
    """
    t = -1 * (cut.num / cut.den)
    if t > ray.t and _is_primary(ray):
        return None
    ray.t = t + FLT_EPSILON
    return replace(cut, p=_start(ray, eye) + ray.t * ray.direction)


def sphere_intersection(ray: Ray, eye: Vector, sphere: Sphere) -> float | None:
    """Distance along the ray to the sphere, or None on a miss."""
    oc = sphere.center - _start(ray, eye)
    p_oc = oc.dot(ray.direction)
    if p_oc < 0:
        return None
    oc_mod = oc.norm()
    d = math.sqrt(max(oc_mod * oc_mod - p_oc * p_oc, 0.0))
    if d > sphere.radius:
        return None
    return p_oc - math.sqrt(max(sphere.radius * sphere.radius - d * d, 0.0))


def hit_sphere(ray: Ray, eye: Vector, sphere: Sphere) -> Hit | None:
    """Hit of a camera ray on a sphere, when nearer than any earlier hit."""
    t = sphere_intersection(ray, eye, sphere)
    if t is None or t > ray.t:
        return None
    ray.t = t
    point = eye + ray.t * ray.direction
    return Hit(point=point, normal=point - sphere.center, rgb=sphere.rgb)


def hit_plane(ray: Ray, eye: Vector, plane: Plane) -> Hit | None:
    """Hit of a ray on an infinite plane."""
    cut = plane_intersection(ray, eye, plane.point, plane.n)
    if cut is None:
        return None
    cut = plane_point(ray, eye, cut)
    if cut is None:
        return None
    cut = _facing(cut)
    return Hit(point=cut.p, normal=cut.normal, rgb=plane.rgb)


def inside_square(square: Square, cut: PlaneCut) -> bool:
    """Whether the point of a plane cut lies within the square."""
    dx = unit_axis("x")
    dy = cut.normal.cross(dx)
    if dy.is_zero():
        dx = unit_axis("y")
        dy = cut.normal.cross(dx)
    dx = dx.normalized()
    dy = dy.normalized()
    offset = cut.p - square.center
    return not (
        abs(dx.dot(offset)) > square.side or abs(dy.dot(offset)) > square.side
    )


def hit_square(ray: Ray, eye: Vector, square: Square) -> Hit | None:
    """Hit of a ray on a square; ``ray.t`` is left as it was on a miss."""
    last_t = ray.t
    cut = plane_intersection(ray, eye, square.center, square.n)
    if cut is not None:
        cut = plane_point(ray, eye, cut)
        if cut is not None and inside_square(square, cut):
            cut = _facing(cut)
            return Hit(point=cut.p, normal=cut.normal, rgb=square.rgb)
    ray.t = last_t
    return None


def inside_triangle(triangle: Triangle, point: Vector) -> bool:
    """Whether a point of the triangle's plane lies inside the triangle."""
    p0 = point - triangle.a
    e0, e1, det = triangle.e0, triangle.e1, triangle.det
    if triangle.equation == 0:
        p = (e1.y * p0.x - e1.x * p0.y) / det
        q = (e0.x * p0.y - e0.y * p0.x) / det
    elif triangle.equation == 1:
        p = (e1.z * p0.y - e1.y * p0.z) / det
        q = (e0.y * p0.z - e0.z * p0.y) / det
    else:
        p = (e1.z * p0.x - e1.x * p0.z) / det
        q = (e0.x * p0.z - e0.z * p0.x) / det
    return 0 <= p <= 1 and 0 <= q <= 1 and 0 <= p + q <= 1


def triangle_intersection(
    ray: Ray, eye: Vector, triangle: Triangle
) -> PlaneCut | None:
    """Cut of a ray with a triangle, normal facing the ray; None on a miss."""
    last_t = ray.t
    normal = triangle.e1.cross(triangle.e0)
    cut = plane_intersection(ray, eye, triangle.a, normal)
    if cut is not None:
        cut = plane_point(ray, eye, cut)
        if cut is not None and inside_triangle(triangle, cut.p):
            return _facing(cut)
    ray.t = last_t
    return None


def hit_triangle(ray: Ray, eye: Vector, triangle: Triangle) -> Hit | None:
    """Hit of a ray on a triangle."""
    cut = triangle_intersection(ray, eye, triangle)
    if cut is None:
        return None
    return Hit(point=cut.p, normal=cut.normal, rgb=triangle.rgb)


def cylinder_intersection(ray: Ray, eye: Vector, cylinder: Cylinder) -> float | None:
    """Distance to the infinite tube around the cylinder's axis, updating ``ray.t``."""
    oc = _start(ray, eye) - cylinder.point
    dn = ray.direction.dot(cylinder.n)
    ocn = oc.dot(cylinder.n)
    a = 1 - dn * dn
    b = 2 * (ray.direction.dot(oc) - dn * ocn)
    c = oc.dot(oc) - ocn * ocn - cylinder.radius * cylinder.radius
    discr = b * b - 4 * a * c
    if discr < 0 or a == 0:
        return None
    x1 = (-b + math.sqrt(discr)) / (2 * a)
    x2 = (-b - math.sqrt(discr)) / (2 * a)
    t = x2 if x1 > x2 else 0.0
    if t < 0:
        return None
    if t > ray.t and _is_primary(ray):
        return None
    ray.t = t
    return t


def _body_hit(
    ray: Ray, eye: Vector, cylinder: Cylinder
) -> tuple[float, float, Vector] | None:
    """Distance, height along the axis and point of a tube hit, leaving ``ray`` alone."""
    probe = replace(ray)
    t = cylinder_intersection(probe, eye, cylinder)
    if t is None:
        return None
    point = eye + t * ray.direction
    m = cylinder.n.dot(point - cylinder.point)
    return t, m, point


def cap_intersection(
    ray: Ray, eye: Vector, cylinder: Cylinder, point: Vector
) -> PlaneCut | None:
    """Cut of a ray with the cap disc centred on ``point``, normal facing the ray."""
    cut = plane_intersection(ray, eye, point, cylinder.n)
    if cut is None:
        return None
    cut = plane_point(ray, eye, cut)
    if cut is None or (cut.p - cut.point).norm() >= cylinder.radius:
        return None
    return _facing(cut)


def nearest_cap(eye: Vector, cylinder: Cylinder) -> Vector:
    """Centre of whichever cap lies closer to ``eye``."""
    top = cylinder.point + cylinder.height * cylinder.n
    if (eye - cylinder.point).norm() > (eye - top).norm():
        return top
    return cylinder.point


def hit_caps(ray: Ray, eye: Vector, cylinder: Cylinder) -> Hit | None:
    """Hit of a ray on a cylinder's caps; ``ray.t`` is left as it was on a miss."""
    last_t = ray.t
    body = _body_hit(ray, eye, cylinder)
    if body is not None and body[1] and body[1] > cylinder.height:
        centre = cylinder.point + cylinder.height * cylinder.n
    else:
        centre = nearest_cap(eye, cylinder)
    cut = cap_intersection(ray, eye, cylinder, centre)
    if cut is not None:
        return Hit(point=cut.p, normal=cut.normal, rgb=cylinder.rgb)
    ray.t = last_t
    return None


def hit_cylinder(ray: Ray, eye: Vector, cylinder: Cylinder) -> Hit | None:
    """Hit of a ray on a closed cylinder: its side first, then its caps."""
    body = _body_hit(ray, eye, cylinder)
    if body is not None:
        t, m, point = body
        if 0 < m < cylinder.height:
            ray.t = t
            centre = cylinder.point + m * cylinder.n
            return Hit(point=point, normal=point - centre, rgb=cylinder.rgb)
    return hit_caps(ray, eye, cylinder)