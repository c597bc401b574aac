"""Reference ellipsoids.

Each ellipsoid is defined by its semi-major axis a, semi-minor axis b and
flattening f. f is stored as published rather than derived from a and b,
since 2f - f^2 is better conditioned for e^2 than (a^2 - b^2) / a^2.
"""

from dataclasses import dataclass
from types import MappingProxyType

from ..errors import UnrecognizedEllipsoid


@dataclass(frozen=True)
class Ellipsoid:
    name: str
    a: float
    b: float
    f: float

    def __post_init__(self):
        if not (self.a > self.b > 0):
            raise ValueError(f"Ellipsoid {self.name}: require a > b > 0, got a={self.a}, b={self.b}")
        if not (0 < self.f < 1):
            raise ValueError(f"Ellipsoid {self.name}: flattening {self.f} not in (0, 1)")

    @property
    def eccentricity_squared(self) -> float:
        """First eccentricity squared, e^2 = (a^2 - b^2) / a^2."""
        return 2 * self.f - self.f * self.f

    @property
    def second_eccentricity_squared(self) -> float:
        """Second eccentricity squared, e'^2 = (a^2 - b^2) / b^2."""
        e2 = self.eccentricity_squared
        return e2 / (1 - e2)

    @property
    def third_flattening(self) -> float:
        """n = (a - b) / (a + b), the series parameter for meridional arcs."""
        return (self.a - self.b) / (self.a + self.b)


def _build(*ellipsoids: Ellipsoid) -> MappingProxyType:
    return MappingProxyType({e.name: e for e in ellipsoids})


ELLIPSOIDS = _build(
    Ellipsoid("WGS84", 6378137, 6356752.314245, 1 / 298.257223563),
    Ellipsoid("Airy1830", 6377563.396, 6356256.909, 1 / 299.3249646),
    Ellipsoid("AiryModified", 6377340.189, 6356034.448, 1 / 299.3249646),
    Ellipsoid("Bessel1841", 6377397.155, 6356078.962818, 1 / 299.1528128),
    Ellipsoid("Clarke1866", 6378206.4, 6356583.8, 1 / 294.978698214),
    Ellipsoid("Clarke1880IGN", 6378249.2, 6356515.0, 1 / 293.466021294),
    Ellipsoid("GRS80", 6378137, 6356752.314140, 1 / 298.257222101),
    Ellipsoid("Intl1924", 6378388, 6356911.946, 1 / 297),  # aka Hayford
    Ellipsoid("WGS72", 6378135, 6356750.5, 1 / 298.26),
)


def get_ellipsoid(name: str) -> Ellipsoid:
    try:
        return ELLIPSOIDS[name]
    except KeyError:
        raise UnrecognizedEllipsoid(name) from None
