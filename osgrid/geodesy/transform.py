"""Datum transformation, relayed through the registry's hub datum."""

import logging
from typing import Union

from .cartesian import CartesianPoint, GeodeticPoint, to_cartesian, to_geodetic
from .datums import DATUMS, Datum, DatumRegistry

logger = logging.getLogger(__name__)


class DatumTransformer:
    """Converts points between any two datums of a registry.

    Each datum's Helmert parameters are relative to the hub, so a conversion
    is at most two transforms: source -> hub (negated source parameters)
    then hub -> destination (destination parameters).
    """

    def __init__(self, registry: DatumRegistry = DATUMS):
        self.registry = registry

    def convert(self, point: CartesianPoint, to_datum: Union[Datum, str]) -> CartesianPoint:
        to_datum = self.registry.resolve(to_datum)
        source = point.datum

        # the Helmert pair is not exactly self-inverse, so never apply it needlessly
        if source == to_datum:
            return point

        if source.is_hub:
            transform = to_datum.transform
        elif to_datum.is_hub:
            transform = source.transform.negated()
        else:
            point = self.convert(point, self.registry.hub)
            transform = to_datum.transform

        x, y, z = transform.apply(point.x, point.y, point.z)
        logger.debug("Converted %s -> %s", point.datum.name, to_datum.name)
        return CartesianPoint(x, y, z, to_datum)

    def convert_geodetic(self, point: GeodeticPoint, to_datum: Union[Datum, str]) -> GeodeticPoint:
        to_datum = self.registry.resolve(to_datum)
        if point.datum == to_datum:
            return point
        return to_geodetic(self.convert(to_cartesian(point), to_datum))


default_transformer = DatumTransformer()


def convert_datum(point: GeodeticPoint, to_datum: Union[Datum, str]) -> GeodeticPoint:
    """Convert a lat/lon point to another datum of the default registry.

    e.g. GeodeticPoint(51.47788, -0.00147) on WGS84 is about
    51.4773°N, 000.0001°E on OSGB36.
    """
    return default_transformer.convert_geodetic(point, to_datum)
