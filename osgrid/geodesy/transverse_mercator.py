"""Ellipsoidal Transverse Mercator projection (Redfearn's series).

Formulation as published by Ordnance Survey in 'A guide to coordinate
systems in Great Britain', Annex C. Forward projection is a closed-form
series; the inverse recovers latitude by fixed-point iteration on the
meridional arc, then applies a closed-form correction for the distance
from the central meridian.
"""

import logging
import math

from .. import config
from ..errors import ConvergenceError, DatumMismatch, DegenerateGeometry
from .cartesian import GeodeticPoint
from .datums import OSGB36, Datum

logger = logging.getLogger(__name__)


class TransverseMercator:
    """A Transverse Mercator projection bound to one datum and origin."""

    def __init__(
        self,
        datum: Datum,
        scale_factor: float,
        origin_latitude: float,
        origin_longitude: float,
        false_easting: float,
        false_northing: float,
        max_iterations: int = config.UNPROJECT_MAX_ITERATIONS,
        tolerance: float = config.UNPROJECT_TOLERANCE_M,
    ):
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.datum = datum
        self.f0 = scale_factor
        self.phi0 = math.radians(origin_latitude)
        self.lambda0 = math.radians(origin_longitude)
        self.e0 = false_easting
        self.n0 = false_northing
        self.max_iterations = max_iterations
        self.tolerance = tolerance

        a, b = datum.ellipsoid.a, datum.ellipsoid.b
        self.a = a
        self.b = b
        # OS formulae take e² and n from the axes, not the flattening
        self.e2 = 1 - (b * b) / (a * a)
        n = (a - b) / (a + b)
        n2 = n * n
        n3 = n2 * n
        self._arc_coeffs = (
            1 + n + (5 / 4) * n2 + (5 / 4) * n3,
            3 * n + 3 * n2 + (21 / 8) * n3,
            (15 / 8) * n2 + (15 / 8) * n3,
            (35 / 24) * n3,
        )

    def meridional_arc(self, phi: float) -> float:
        """Scaled meridional arc from the true origin's latitude to phi (radians)."""
        ca, cb, cc, cd = self._arc_coeffs
        dphi = phi - self.phi0
        sphi = phi + self.phi0
        ma = ca * dphi
        mb = cb * math.sin(dphi) * math.cos(sphi)
        mc = cc * math.sin(2 * dphi) * math.cos(2 * sphi)
        md = cd * math.sin(3 * dphi) * math.cos(3 * sphi)
        return self.b * self.f0 * (ma - mb + mc - md)

    def _radii(self, phi: float) -> tuple[float, float, float]:
        """ν, ρ and η² at latitude phi, scaled by F0."""
        sin_phi = math.sin(phi)
        w = 1 - self.e2 * sin_phi * sin_phi
        nu = self.a * self.f0 / math.sqrt(w)  # transverse radius of curvature
        rho = self.a * self.f0 * (1 - self.e2) / w ** 1.5  # meridional radius of curvature
        eta2 = nu / rho - 1
        return nu, rho, eta2

    def project(self, point: GeodeticPoint) -> tuple[float, float]:
        """Latitude/longitude on this projection's datum to (easting, northing)."""
        if point.datum != self.datum:
            raise DatumMismatch(
                f"Point is on {point.datum.name}; projection expects {self.datum.name}"
            )

        phi = math.radians(point.latitude)
        lam = math.radians(point.longitude)

        sin_phi = math.sin(phi)
        cos_phi = math.cos(phi)
        nu, rho, eta2 = self._radii(phi)
        m = self.meridional_arc(phi)

        cos3 = cos_phi ** 3
        cos5 = cos3 * cos_phi * cos_phi
        tan2 = math.tan(phi) ** 2
        tan4 = tan2 * tan2

        i = m + self.n0
        ii = (nu / 2) * sin_phi * cos_phi
        iii = (nu / 24) * sin_phi * cos3 * (5 - tan2 + 9 * eta2)
        iiia = (nu / 720) * sin_phi * cos5 * (61 - 58 * tan2 + tan4)
        iv = nu * cos_phi
        v = (nu / 6) * cos3 * (nu / rho - tan2)
        vi = (nu / 120) * cos5 * (5 - 18 * tan2 + tan4 + 14 * eta2 - 58 * tan2 * eta2)

        dl = lam - self.lambda0
        northing = i + ii * dl ** 2 + iii * dl ** 4 + iiia * dl ** 6
        easting = self.e0 + iv * dl + v * dl ** 3 + vi * dl ** 5
        return easting, northing

    def solve_latitude(self, northing: float) -> tuple[float, int]:
        """Latitude (radians) on the central meridian for a northing.

        Returns the latitude and the number of iterations taken; raises
        ConvergenceError if the residual is still above tolerance after
        max_iterations.
        """
        phi = self.phi0
        m = 0.0
        residual = northing - self.n0
        for iteration in range(1, self.max_iterations + 1):
            phi = (northing - self.n0 - m) / (self.a * self.f0) + phi
            m = self.meridional_arc(phi)
            residual = northing - self.n0 - m
            if abs(residual) < self.tolerance:
                return phi, iteration
        raise ConvergenceError(northing, self.max_iterations, abs(residual))

    def unproject(self, easting: float, northing: float) -> GeodeticPoint:
        """(easting, northing) to latitude/longitude on this projection's datum."""
        if not (math.isfinite(easting) and math.isfinite(northing)):
            raise DegenerateGeometry(f"Easting/northing must be finite, got ({easting}, {northing})")

        phi, iterations = self.solve_latitude(northing)
        logger.debug("Latitude for N=%s converged in %d iterations", northing, iterations)

        cos_phi = math.cos(phi)
        nu, rho, eta2 = self._radii(phi)

        tan_phi = math.tan(phi)
        tan2 = tan_phi * tan_phi
        tan4 = tan2 * tan2
        tan6 = tan4 * tan2
        sec_phi = 1 / cos_phi
        nu3 = nu ** 3
        nu5 = nu ** 5
        nu7 = nu ** 7

        vii = tan_phi / (2 * rho * nu)
        viii = tan_phi / (24 * rho * nu3) * (5 + 3 * tan2 + eta2 - 9 * tan2 * eta2)
        ix = tan_phi / (720 * rho * nu5) * (61 + 90 * tan2 + 45 * tan4)
        x = sec_phi / nu
        xi = sec_phi / (6 * nu3) * (nu / rho + 2 * tan2)
        xii = sec_phi / (120 * nu5) * (5 + 28 * tan2 + 24 * tan4)
        xiia = sec_phi / (5040 * nu7) * (61 + 662 * tan2 + 1320 * tan4 + 720 * tan6)

        de = easting - self.e0
        lat = phi - vii * de ** 2 + viii * de ** 4 - ix * de ** 6
        lon = self.lambda0 + x * de - xi * de ** 3 + xii * de ** 5 - xiia * de ** 7

        return GeodeticPoint(math.degrees(lat), math.degrees(lon), 0.0, self.datum)


# National Grid: Airy 1830 on OSGB36, true origin 49°N 2°W,
# false origin 400km west and 100km north of it
NATIONAL_GRID_PROJECTION = TransverseMercator(
    datum=OSGB36,
    scale_factor=0.9996012717,
    origin_latitude=49.0,
    origin_longitude=-2.0,
    false_easting=400000.0,
    false_northing=-100000.0,
)
