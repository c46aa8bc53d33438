"""Lighting, shadows and the final colour of a surface point."""

from __future__ import annotations

from minirt.geometry import (
    Hit,
    Ray,
    cap_intersection,
    cylinder_intersection,
    inside_square,
    plane_intersection,
    plane_point,
    sphere_intersection,
    triangle_intersection,
)
from minirt.scene import (
    Cylinder,
    Light,
    Option,
    Plane,
    Rgb,
    Scene,
    Sphere,
    Square,
    Triangle,
)
from minirt.vector import Vector

# Distance below which a shadow ray is taken to hit its own starting point.
_SELF_HIT = 0.0001
_SHININESS = 50


def light_direction(light: Light, point: Vector) -> Vector:
    """Unit vector from ``point`` towards the light.

    A light with a non-zero ``parallel`` vector shines along that vector, so
    the direction is its opposite whatever the point.
    """
    if not light.parallel.is_zero():
        return (-1 * light.parallel).normalized()
    return (light.pos - point).normalized()


def _shadow_position(light: Light, point: Vector) -> Vector:
    """The light position used when testing sphere shadows from ``point``."""
    if not light.parallel.is_zero():
        direction = light_direction(light, point)
        return direction.dot(light.pos - point) * direction
    return light.pos


def ambient_color(scene: Scene, rgb: Rgb) -> Rgb:
    """Ambient contribution for a surface of colour ``rgb``."""
    amb = scene.ambient
    return Rgb(
        amb.intensity * amb.rgb.r * rgb.r / 255,
        amb.intensity * amb.rgb.g * rgb.g / 255,
        amb.intensity * amb.rgb.b * rgb.b / 255,
    )


def spot_color(scene: Scene, light_dir: Vector, normal: Vector, rgb: Rgb) -> Rgb:
    """Diffuse and specular contribution of a spot light.

    Intensity and colour are always those of the scene's first light.
    """
    first = scene.lights[0]
    diffuse = light_dir.dot(normal)
    kd = 0.0 if diffuse < 0 else first.intensity
    if Option.NO_SPECULAR in scene.options:
        specular = 0.0
    else:
        specular = max(diffuse, 0.0) ** _SHININESS
    return Rgb(
        kd * first.rgb.r * (rgb.r * diffuse / 255 + specular),
        kd * first.rgb.g * (rgb.g * diffuse / 255 + specular),
        kd * first.rgb.b * (rgb.b * diffuse / 255 + specular),
    )


def between_light_source(light: Vector, point: Vector, origin: Vector) -> bool:
    """Whether ``point`` lies closer to ``origin`` than the light does."""
    to_point = (point - origin).norm()
    to_light = (light - origin).norm()
    return _SELF_HIT < to_point < to_light


def shadow_sphere(scene: Scene, light: Light, ray: Ray, sphere: Sphere) -> bool:
    """Whether the sphere blocks the light along a shadow ray."""
    t = sphere_intersection(ray, ray.origin, sphere)
    if t is None:
        return False
    ray.t = t
    point = ray.origin + t * ray.direction
    return between_light_source(
        _shadow_position(light, ray.origin), point, ray.origin
    )


def shadow_plane(scene: Scene, light: Light, ray: Ray, plane: Plane) -> bool:
    """Whether the plane blocks the light along a shadow ray."""
    cut = plane_intersection(ray, ray.origin, plane.point, plane.n)
    if cut is None:
        return False
    cut = plane_point(ray, ray.origin, cut)
    if cut is None:
        return False
    return between_light_source(light.pos, cut.p, ray.origin)


def shadow_square(scene: Scene, light: Light, ray: Ray, square: Square) -> bool:
    """Whether the square blocks the light along a shadow ray."""
    cut = plane_intersection(ray, ray.origin, square.center, square.n)
    if cut is None:
        return False
    cut = plane_point(ray, ray.origin, cut)
    if cut is None or not inside_square(square, cut):
        return False
    return between_light_source(light.pos, cut.p, ray.origin)


def shadow_triangle(
    scene: Scene, light: Light, ray: Ray, triangle: Triangle
) -> bool:
    """Whether the triangle blocks the light along a shadow ray."""
    cut = triangle_intersection(ray, ray.origin, triangle)
    if cut is None:
        return False
    return between_light_source(light.pos, cut.p, ray.origin)


def shadow_cylinder(
    scene: Scene, light: Light, ray: Ray, cylinder: Cylinder
) -> bool:
    """Whether the cylinder, side or caps, blocks the light along a shadow ray."""
    m = 0.0
    t = cylinder_intersection(ray, ray.origin, cylinder)
    if t is not None:
        point = ray.origin + t * ray.direction
        if between_light_source(light.pos, point, ray.origin):
            m = cylinder.n.dot(point - cylinder.point)
            if 0 < m < cylinder.height:
                return True
    if m and m > cylinder.height:
        centre = cylinder.point + cylinder.height * cylinder.n
    else:
        centre = cylinder.point
    cut = cap_intersection(ray, ray.origin, cylinder, centre)
    if cut is None:
        return False
    return between_light_source(light.pos, cut.p, ray.origin)


def in_shadow(scene: Scene, light: Light, ray: Ray) -> bool:
    """Whether any object of the scene blocks ``light`` along the shadow ray."""
    checks = (
        (shadow_sphere, scene.spheres),
        (shadow_plane, scene.planes),
        (shadow_square, scene.squares),
        (shadow_triangle, scene.triangles),
        (shadow_cylinder, scene.cylinders),
    )
    return any(
        test(scene, light, ray, item) for test, items in checks for item in items
    )


def surface_color(scene: Scene, hit: Hit) -> int:
    """Colour of a surface point as 0xRRGGBB, summed over every light."""
    if not scene.lights:
        return ambient_color(scene, hit.rgb).to_int()
    normal = hit.normal.normalized()
    color = Rgb()
    for light in scene.lights:
        direction = light_direction(light, hit.point)
        shadow_ray = Ray(direction=direction, origin=hit.point)
        lit = ambient_color(scene, hit.rgb)
        if not in_shadow(scene, light, shadow_ray):
            lit = lit + spot_color(scene, direction, normal, hit.rgb)
        color = color + lit
    return color.to_int()