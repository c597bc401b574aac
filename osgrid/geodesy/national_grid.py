"""Ordnance Survey National Grid references and their conversion to and
from latitude/longitude on any registered datum.

Grid references are always OSGB36 Transverse Mercator coordinates; points
on other datums are converted to OSGB36 (via the hub) before projecting,
and unprojected points are converted out of OSGB36 afterwards.

These are ellipsoidal calculations, accurate to about 4-5 metres against
the OS's geoid-based OSTN15 transformation.
"""

import logging
from dataclasses import dataclass
from typing import Union

from ..errors import InvalidGridReference, OutOfRangeGridReference
from .cartesian import GeodeticPoint
from .datums import Datum
from .transform import DatumTransformer, default_transformer
from .transverse_mercator import NATIONAL_GRID_PROJECTION, TransverseMercator

logger = logging.getLogger(__name__)

MAX_EASTING = 700_000
MAX_NORTHING = 1_300_000


@dataclass(frozen=True)
class GridReference:
    """Easting/northing in whole metres from the National Grid false origin."""

    easting: int
    northing: int

    def __post_init__(self):
        for name in ("easting", "northing"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidGridReference(f"Grid reference {name} must be whole metres, got {value!r}")

    def is_valid(self) -> bool:
        return 0 <= self.easting <= MAX_EASTING and 0 <= self.northing <= MAX_NORTHING

    def validate(self) -> "GridReference":
        if not self.is_valid():
            raise OutOfRangeGridReference(self.easting, self.northing)
        return self


class NationalGrid:
    def __init__(
        self,
        projection: TransverseMercator = NATIONAL_GRID_PROJECTION,
        transformer: DatumTransformer = default_transformer,
    ):
        self.projection = projection
        self.transformer = transformer

    @property
    def datum(self) -> Datum:
        return self.projection.datum

    def to_latlon(
        self,
        ref: GridReference,
        datum: Union[Datum, str, None] = None,
    ) -> GeodeticPoint:
        """Grid reference to lat/lon, on the hub datum unless another is given."""
        to_datum = self.transformer.registry.resolve(datum)
        ref.validate()
        local = self.projection.unproject(ref.easting, ref.northing)
        logger.debug("Grid %s,%s -> %s %.6f,%.6f", ref.easting, ref.northing,
                     local.datum.name, local.latitude, local.longitude)
        return self.transformer.convert_geodetic(local, to_datum)

    def to_grid(self, point: GeodeticPoint) -> GridReference:
        """Lat/lon on any datum to a grid reference rounded to whole metres."""
        if point.datum != self.datum:
            point = self.transformer.convert_geodetic(point, self.datum)
        easting, northing = self.projection.project(point)
        return GridReference(round(easting), round(northing)).validate()


NATIONAL_GRID = NationalGrid()


def gridref_to_latlon(
    ref: GridReference,
    datum: Union[Datum, str, None] = None,
) -> GeodeticPoint:
    return NATIONAL_GRID.to_latlon(ref, datum)


def latlon_to_gridref(point: GeodeticPoint) -> GridReference:
    return NATIONAL_GRID.to_grid(point)

