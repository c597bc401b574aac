"""Great-circle geometry on a spherical earth.

All functions take and return degrees; distances are in the units of
``radius`` (metres by default). Simple spherical trigonometry, so expect
errors of up to about 0.3% against ellipsoidal results.
"""

import math
from typing import Optional, Sequence

from ..parsing import wrap180, wrap360

EARTH_RADIUS_M = 6_371_000.0  # mean radius

LatLonPair = tuple[float, float]


# ── Distance & bearing ───────────────────────────────────────────


def distance(lat1: float, lon1: float, lat2: float, lon2: float,
             radius: float = EARTH_RADIUS_M) -> float:
    """Haversine distance between two lat/lon points."""
    phi1, lam1, phi2, lam2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dphi = phi2 - phi1
    dlam = lam2 - lam1
    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    )
    a = min(a, 1.0)
    return radius * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def initial_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial bearing from point 1 to point 2, degrees from north (0-360)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlam = math.radians(lon2 - lon1)

    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlam)
    y = math.sin(dlam) * math.cos(phi2)
    return wrap360(math.degrees(math.atan2(y, x)))


def final_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Bearing on arrival at point 2; the reverse of point 2's initial bearing."""
    return wrap360(initial_bearing(lat2, lon2, lat1, lon1) + 180)


# ── Points along a path ──────────────────────────────────────────


def midpoint(lat1: float, lon1: float, lat2: float, lon2: float) -> LatLonPair:
    phi1 = math.radians(lat1)
    lam1 = math.radians(lon1)
    phi2 = math.radians(lat2)
    dlam = math.radians(lon2 - lon1)

    # sum of the unit vectors to each point, with point 1 on the prime meridian
    cx = math.cos(phi1) + math.cos(phi2) * math.cos(dlam)
    cy = math.cos(phi2) * math.sin(dlam)
    cz = math.sin(phi1) + math.sin(phi2)
    if math.hypot(cx, cy, cz) < 1e-7:
        raise ValueError("No unique great circle between antipodal points")

    phi_m = math.atan2(cz, math.sqrt(cx * cx + cy * cy))
    lam_m = lam1 + math.atan2(cy, cx)
    return math.degrees(phi_m), wrap180(math.degrees(lam_m))


def intermediate_point(lat1: float, lon1: float, lat2: float, lon2: float,
                       fraction: float) -> LatLonPair:
    """Point at ``fraction`` of the way from point 1 (0) to point 2 (1)."""
    if (lat1, lon1) == (lat2, lon2):
        return lat1, lon1

    phi1, lam1, phi2, lam2 = map(math.radians, [lat1, lon1, lat2, lon2])
    delta = distance(lat1, lon1, lat2, lon2, radius=1.0)
    if delta == 0:
        return lat1, lon1
    # within about a metre of antipodal on the earth
    if math.pi - delta < 1e-7:
        raise ValueError("No unique great circle between antipodal points")

    a = math.sin((1 - fraction) * delta) / math.sin(delta)
    b = math.sin(fraction * delta) / math.sin(delta)

    x = a * math.cos(phi1) * math.cos(lam1) + b * math.cos(phi2) * math.cos(lam2)
    y = a * math.cos(phi1) * math.sin(lam1) + b * math.cos(phi2) * math.sin(lam2)
    z = a * math.sin(phi1) + b * math.sin(phi2)

    phi3 = math.atan2(z, math.sqrt(x * x + y * y))
    lam3 = math.atan2(y, x)
    return math.degrees(phi3), wrap180(math.degrees(lam3))


def destination_point(lat: float, lon: float, dist: float, bearing: float,
                      radius: float = EARTH_RADIUS_M) -> LatLonPair:
    """Point reached travelling ``dist`` from (lat, lon) on initial ``bearing``."""
    delta = dist / radius  # angular distance
    theta = math.radians(bearing)
    phi1 = math.radians(lat)
    lam1 = math.radians(lon)

    sin_phi2 = math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    phi2 = math.asin(max(-1.0, min(1.0, sin_phi2)))
    y = math.sin(theta) * math.sin(delta) * math.cos(phi1)
    x = math.cos(delta) - math.sin(phi1) * sin_phi2
    lam2 = lam1 + math.atan2(y, x)
    return math.degrees(phi2), wrap180(math.degrees(lam2))


def intersection(lat1: float, lon1: float, bearing1: float,
                 lat2: float, lon2: float, bearing2: float) -> Optional[LatLonPair]:
    """Where two great-circle paths cross, or None if there is no unique crossing.

    See www.edwilliams.org/avform.htm#Intersection.
    """
    phi1, lam1 = math.radians(lat1), math.radians(lon1)
    phi2, lam2 = math.radians(lat2), math.radians(lon2)
    theta13, theta23 = math.radians(bearing1), math.radians(bearing2)

    # angular distance p1-p2
    delta12 = distance(lat1, lon1, lat2, lon2, radius=1.0)
    if abs(delta12) < 1e-12:
        return lat1, lon1

    # initial/final bearings between the two points
    cos_ta = (math.sin(phi2) - math.sin(phi1) * math.cos(delta12)) / (math.sin(delta12) * math.cos(phi1))
    cos_tb = (math.sin(phi1) - math.sin(phi2) * math.cos(delta12)) / (math.sin(delta12) * math.cos(phi2))
    theta_a = math.acos(max(-1.0, min(1.0, cos_ta)))
    theta_b = math.acos(max(-1.0, min(1.0, cos_tb)))

    if math.sin(lam2 - lam1) > 0:
        theta12, theta21 = theta_a, 2 * math.pi - theta_b
    else:
        theta12, theta21 = 2 * math.pi - theta_a, theta_b

    alpha1 = theta13 - theta12  # angle 2-1-3
    alpha2 = theta21 - theta23  # angle 1-2-3

    if math.sin(alpha1) == 0 and math.sin(alpha2) == 0:
        return None  # infinite intersections
    if math.sin(alpha1) * math.sin(alpha2) < 0:
        return None  # ambiguous intersection (antipodal or 360° apart)

    cos_alpha3 = (-math.cos(alpha1) * math.cos(alpha2)
                  + math.sin(alpha1) * math.sin(alpha2) * math.cos(delta12))
    delta13 = math.atan2(math.sin(delta12) * math.sin(alpha1) * math.sin(alpha2),
                         math.cos(alpha2) + math.cos(alpha1) * cos_alpha3)

    sin_phi3 = math.sin(phi1) * math.cos(delta13) + math.cos(phi1) * math.sin(delta13) * math.cos(theta13)
    phi3 = math.asin(max(-1.0, min(1.0, sin_phi3)))
    dlam13 = math.atan2(math.sin(theta13) * math.sin(delta13) * math.cos(phi1),
                        math.cos(delta13) - math.sin(phi1) * math.sin(phi3))
    lam3 = lam1 + dlam13
    return math.degrees(phi3), wrap180(math.degrees(lam3))


# ── Distance from a path ─────────────────────────────────────────


def cross_track_distance(lat: float, lon: float,
                         start_lat: float, start_lon: float,
                         end_lat: float, end_lon: float,
                         radius: float = EARTH_RADIUS_M) -> float:
    """Signed distance from a point to the great circle start->end (-ve is left)."""
    if (lat, lon) == (start_lat, start_lon):
        return 0.0
    delta13 = distance(start_lat, start_lon, lat, lon, radius=1.0)
    theta13 = math.radians(initial_bearing(start_lat, start_lon, lat, lon))
    theta12 = math.radians(initial_bearing(start_lat, start_lon, end_lat, end_lon))
    return math.asin(math.sin(delta13) * math.sin(theta13 - theta12)) * radius


def along_track_distance(lat: float, lon: float,
                         start_lat: float, start_lon: float,
                         end_lat: float, end_lon: float,
                         radius: float = EARTH_RADIUS_M) -> float:
    """Distance from start to the foot of the perpendicular from the point."""
    if (lat, lon) == (start_lat, start_lon):
        return 0.0
    delta13 = distance(start_lat, start_lon, lat, lon, radius=1.0)
    theta13 = math.radians(initial_bearing(start_lat, start_lon, lat, lon))
    theta12 = math.radians(initial_bearing(start_lat, start_lon, end_lat, end_lon))

    delta_xt = math.asin(math.sin(delta13) * math.sin(theta13 - theta12))
    ratio = math.cos(delta13) / abs(math.cos(delta_xt))
    delta_at = math.acos(max(-1.0, min(1.0, ratio)))
    return math.copysign(delta_at, math.cos(theta12 - theta13)) * radius


def max_latitude(lat: float, bearing: float) -> float:
    """Highest latitude reached on a great circle (Clairaut's formula)."""
    theta = math.radians(bearing)
    phi = math.radians(lat)
    return math.degrees(math.acos(abs(math.sin(theta) * math.cos(phi))))


# ── Area ─────────────────────────────────────────────────────────


def _encloses_pole(polygon: Sequence[LatLonPair]) -> bool:
    # sum of course changes around a pole-enclosing polygon is ~0° rather than ±360°
    total = 0.0
    prev = initial_bearing(*polygon[0], *polygon[1])
    for v in range(len(polygon) - 1):
        init = initial_bearing(*polygon[v], *polygon[v + 1])
        final = final_bearing(*polygon[v], *polygon[v + 1])
        total += (init - prev + 540) % 360 - 180
        total += (final - init + 540) % 360 - 180
        prev = final
    init = initial_bearing(*polygon[0], *polygon[1])
    total += (init - prev + 540) % 360 - 180
    return abs(total) < 90


def area(polygon: Sequence[LatLonPair], radius: float = EARTH_RADIUS_M) -> float:
    """Area of a polygon whose sides are great-circle arcs between (lat, lon) vertices.

    The polygon may be given open or closed. Uses Karney's per-edge spherical
    excess: tan(E/2) = tan(Δλ/2)·(tan(φ1/2)+tan(φ2/2)) / (1+tan(φ1/2)·tan(φ2/2)).
    """
    points = [tuple(p) for p in polygon]
    if len(points) < 2:
        raise ValueError("A polygon needs at least two vertices")
    if points[0] != points[-1]:
        points.append(points[0])

    excess = 0.0  # steradians
    for v in range(len(points) - 1):
        phi1 = math.radians(points[v][0])
        phi2 = math.radians(points[v + 1][0])
        dlam = math.radians(points[v + 1][1] - points[v][1])
        t1 = math.tan(phi1 / 2)
        t2 = math.tan(phi2 / 2)
        excess += 2 * math.atan2(math.tan(dlam / 2) * (t1 + t2), 1 + t1 * t2)

    if _encloses_pole(points):
        excess = abs(excess) - 2 * math.pi

    return abs(excess * radius * radius)
