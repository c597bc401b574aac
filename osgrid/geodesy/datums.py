"""Geodetic datums and their Helmert parameters relative to the hub datum.

Every datum stores the 7-parameter transform that takes a geocentric point
*from* the hub (WGS84) *to* that datum. Conversions between two non-hub
datums are relayed through the hub; there is no pairwise table.

Precision varies by datum. WGS84 itself is only defined to about 1 metre,
and none of these transforms should be trusted to better than a metre.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from ..errors import UnrecognizedDatum
from .ellipsoids import ELLIPSOIDS, Ellipsoid

_ARCSEC_TO_RAD = math.pi / (180 * 3600)


@dataclass(frozen=True)
class HelmertTransform:
    """Translation (m), scale (ppm) and rotations (arc-seconds)."""

    tx: float = 0.0
    ty: float = 0.0
    tz: float = 0.0
    s: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0

    @property
    def is_identity(self) -> bool:
        return not any(self.as_tuple())

    def as_tuple(self) -> tuple:
        return (self.tx, self.ty, self.tz, self.s, self.rx, self.ry, self.rz)

    def negated(self) -> "HelmertTransform":
        """Approximate inverse: every parameter with its sign flipped.

        Not the exact inverse of the similarity transform, but the error is
        second order in the (sub-arcsecond, ppm-level) rotations and scale.
        """
        return HelmertTransform(*(-p for p in self.as_tuple()))

    def apply(self, x: float, y: float, z: float) -> tuple[float, float, float]:
        """Apply the linearised (small-angle) transform to a geocentric point."""
        s1 = self.s / 1e6 + 1
        rx = self.rx * _ARCSEC_TO_RAD
        ry = self.ry * _ARCSEC_TO_RAD
        rz = self.rz * _ARCSEC_TO_RAD

        x2 = self.tx + x * s1 - y * rz + z * ry
        y2 = self.ty + x * rz + y * s1 - z * rx
        z2 = self.tz - x * ry + y * rx + z * s1
        return x2, y2, z2


IDENTITY = HelmertTransform()


@dataclass(frozen=True)
class Datum:
    name: str
    ellipsoid: Ellipsoid
    transform: HelmertTransform = IDENTITY
    is_hub: bool = False


class DatumRegistry:
    """Read-only lookup of datums by name, with exactly one hub."""

    def __init__(self, datums: Iterable[Datum]):
        table = {}
        for datum in datums:
            if datum.name in table:
                raise ValueError(f"Duplicate datum '{datum.name}'")
            table[datum.name] = datum

        hubs = [d for d in table.values() if d.is_hub]
        if len(hubs) != 1:
            raise ValueError(f"Datum registry needs exactly one hub datum, found {len(hubs)}")
        if not hubs[0].transform.is_identity:
            raise ValueError(f"Hub datum '{hubs[0].name}' must have the identity transform")

        self._datums = table
        self._hub = hubs[0]

    @property
    def hub(self) -> Datum:
        return self._hub

    def get(self, name: str) -> Datum:
        try:
            return self._datums[name]
        except KeyError:
            raise UnrecognizedDatum(name) from None

    def resolve(self, datum: Union[Datum, str, None]) -> Datum:
        """Accept a Datum, a registry name, or None (meaning the hub)."""
        if datum is None:
            return self._hub
        if isinstance(datum, Datum):
            return datum
        return self.get(datum)

    def names(self) -> list[str]:
        return sorted(self._datums)

    def __contains__(self, name) -> bool:
        return name in self._datums

    def __iter__(self) -> Iterator[Datum]:
        return iter(self._datums.values())

    def __len__(self) -> int:
        return len(self._datums)


def _datum(name, ellipsoid, *params, is_hub=False):
    return Datum(name, ELLIPSOIDS[ellipsoid], HelmertTransform(*params), is_hub)


# transforms: t in metres, s in ppm, r in arcseconds
#                     tx        ty        tz        s         rx        ry        rz
DATUMS = DatumRegistry([
    _datum("ED50", "Intl1924",
           89.5,     93.8,     123.1,    -1.2,     0.0,      0.0,      0.156),
    # coincident with WGS84 at epoch 1989.0, at the one metre level
    _datum("ETRS89", "GRS80",
           0.0,      0.0,      0.0,      0.0,      0.0,      0.0,      0.0),
    _datum("Irl1975", "AiryModified",
           -482.530, 130.596,  -564.557, -8.150,   1.042,    0.214,    0.631),
    _datum("NAD27", "Clarke1866",
           8.0,      -160.0,   -176.0,   0.0,      0.0,      0.0,      0.0),
    _datum("NAD83", "GRS80",
           0.9956,   -1.9103,  -0.5215,  -0.00062, 0.025915, 0.009426, 0.011599),
    _datum("NTF", "Clarke1880IGN",
           168.0,    60.0,     -320.0,   0.0,      0.0,      0.0,      0.0),
    _datum("OSGB36", "Airy1830",
           -446.448, 125.157,  -542.060, 20.4894,  -0.1502,  -0.2470,  -0.8421),
    _datum("Potsdam", "Bessel1841",
           -582.0,   -105.0,   -414.0,   -8.3,     1.04,     0.35,     -3.08),
    _datum("TokyoJapan", "Bessel1841",
           148.0,    -507.0,   -685.0,   0.0,      0.0,      0.0,      0.0),
    _datum("WGS72", "WGS72",
           0.0,      0.0,      -4.5,     -0.22,    0.0,      0.0,      0.554),
    _datum("WGS84", "WGS84", is_hub=True),
])

WGS84 = DATUMS.get("WGS84")
OSGB36 = DATUMS.get("OSGB36")
