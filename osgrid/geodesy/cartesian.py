"""Geodetic (lat/lon/height) and geocentric (x/y/z) points, and conversion
between them on a single datum.

Both point types are immutable and always tagged with the datum they are
defined on; converting produces a new point.
"""

import math
from dataclasses import dataclass, field

from ..errors import DegenerateGeometry
from .datums import WGS84, Datum


def _require_finite(kind: str, **values):
    for name, value in values.items():
        if not math.isfinite(value):
            raise DegenerateGeometry(f"{kind} {name} must be finite, got {value!r}")


@dataclass(frozen=True)
class GeodeticPoint:
    latitude: float
    longitude: float
    height: float = 0.0
    datum: Datum = field(default=WGS84)

    def __post_init__(self):
        _require_finite("GeodeticPoint", latitude=self.latitude,
                        longitude=self.longitude, height=self.height)


@dataclass(frozen=True)
class CartesianPoint:
    x: float
    y: float
    z: float
    datum: Datum = field(default=WGS84)

    def __post_init__(self):
        _require_finite("CartesianPoint", x=self.x, y=self.y, z=self.z)


def to_cartesian(point: GeodeticPoint) -> CartesianPoint:
    """Geodetic lat/lon/height to geocentric x/y/z on the same datum.

    x = (ν+h)⋅cosφ⋅cosλ, y = (ν+h)⋅cosφ⋅sinλ, z = (ν⋅(1-e²)+h)⋅sinφ
    where ν = a/√(1−e²⋅sin²φ) is the prime-vertical radius of curvature.
    """
    ellipsoid = point.datum.ellipsoid
    phi = math.radians(point.latitude)
    lam = math.radians(point.longitude)
    h = point.height

    sin_phi = math.sin(phi)
    cos_phi = math.cos(phi)

    e2 = ellipsoid.eccentricity_squared
    nu = ellipsoid.a / math.sqrt(1 - e2 * sin_phi * sin_phi)

    x = (nu + h) * cos_phi * math.cos(lam)
    y = (nu + h) * cos_phi * math.sin(lam)
    z = (nu * (1 - e2) + h) * sin_phi
    return CartesianPoint(x, y, z, point.datum)


def to_geodetic(point: CartesianPoint) -> GeodeticPoint:
    """Geocentric x/y/z to geodetic lat/lon/height on the same datum.

    Uses Bowring's (1985) formulation, which reaches micrometre precision
    without iterating; B R Bowring, 'The accuracy of geodetic latitude and
    height equations', Survey Review vol 28, 218, Oct 1985.
    """
    x, y, z = point.x, point.y, point.z
    ellipsoid = point.datum.ellipsoid
    a, b = ellipsoid.a, ellipsoid.b

    p = math.hypot(x, y)  # distance from minor axis

    if p == 0:
        # on the polar axis the parametric latitude is 0/0
        if z == 0:
            raise DegenerateGeometry("Latitude is undefined at the centre of the ellipsoid")
        return GeodeticPoint(math.copysign(90.0, z), 0.0, abs(z) - b, point.datum)

    e2 = ellipsoid.eccentricity_squared
    ep2 = ellipsoid.second_eccentricity_squared
    r = math.hypot(p, z)

    # parametric latitude (Bowring eqn 17)
    tan_beta = (b * z) / (a * p) * (1 + ep2 * b / r)
    sin_beta = tan_beta / math.sqrt(1 + tan_beta * tan_beta)
    cos_beta = sin_beta / tan_beta if tan_beta else 1.0

    # geodetic latitude (Bowring eqn 18)
    phi = math.atan2(z + ep2 * b * sin_beta ** 3, p - e2 * a * cos_beta ** 3)
    lam = math.atan2(y, x)

    # height above ellipsoid (Bowring eqn 7)
    sin_phi = math.sin(phi)
    cos_phi = math.cos(phi)
    nu = a / math.sqrt(1 - e2 * sin_phi * sin_phi)
    h = p * cos_phi + z * sin_phi - (a * a / nu)

    return GeodeticPoint(math.degrees(phi), math.degrees(lam), h, point.datum)
