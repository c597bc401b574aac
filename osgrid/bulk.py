"""Bulk conversion of grid references and lat/lon columns in a DataFrame.

Each function returns a copy of the input with result columns added. Rows
that cannot be converted get nulls in the result columns and a message in
the ``error`` column rather than aborting the whole batch.
"""

import logging
from typing import Optional, Union

import pandas as pd

from . import config
from .errors import GeodesyError
from .geodesy.cartesian import GeodeticPoint
from .geodesy.datums import DATUMS, Datum
from .geodesy.national_grid import NATIONAL_GRID
from .parsing import format_grid_reference, parse_degrees, parse_grid_reference

logger = logging.getLogger(__name__)


def _check_size(df: pd.DataFrame):
    if len(df) > config.BULK_MAX_ROWS:
        raise ValueError(
            f"Too many rows: {len(df)} (maximum {config.BULK_MAX_ROWS})"
        )


def _log_failures(kind: str, errors: list[Optional[str]]):
    failed = sum(1 for e in errors if e)
    if failed:
        logger.warning("%s: %d of %d rows could not be converted", kind, failed, len(errors))


def gridrefs_to_latlon(
    df: pd.DataFrame,
    column: str = "gridref",
    datum: Union[Datum, str, None] = None,
) -> pd.DataFrame:
    """Add latitude/longitude (on ``datum``, default WGS84) for a grid reference column."""
    _check_size(df)
    if column not in df.columns:
        raise KeyError(f"Column '{column}' not found")
    to_datum = DATUMS.resolve(datum)

    lats: list[Optional[float]] = []
    lons: list[Optional[float]] = []
    errors: list[Optional[str]] = []

    for value in df[column]:
        if pd.isna(value):
            lats.append(None)
            lons.append(None)
            errors.append("missing grid reference")
            continue
        try:
            point = NATIONAL_GRID.to_latlon(parse_grid_reference(str(value)), to_datum)
        except GeodesyError as e:
            lats.append(None)
            lons.append(None)
            errors.append(str(e))
            continue
        lats.append(point.latitude)
        lons.append(point.longitude)
        errors.append(None)

    _log_failures("gridrefs_to_latlon", errors)

    out = df.copy()
    out["latitude"] = pd.array(lats, dtype="Float64")
    out["longitude"] = pd.array(lons, dtype="Float64")
    out["error"] = errors
    return out


def latlon_to_gridrefs(
    df: pd.DataFrame,
    lat_column: str = "latitude",
    lon_column: str = "longitude",
    datum: Union[Datum, str, None] = None,
    digits: int = config.DEFAULT_GRIDREF_DIGITS,
) -> pd.DataFrame:
    """Add gridref/easting/northing for lat/lon columns on ``datum`` (default WGS84)."""
    _check_size(df)
    for column in (lat_column, lon_column):
        if column not in df.columns:
            raise KeyError(f"Column '{column}' not found")
    from_datum = DATUMS.resolve(datum)

    refs: list[Optional[str]] = []
    eastings: list[Optional[int]] = []
    northings: list[Optional[int]] = []
    errors: list[Optional[str]] = []

    for lat, lon in zip(df[lat_column], df[lon_column]):
        if pd.isna(lat) or pd.isna(lon):
            refs.append(None)
            eastings.append(None)
            northings.append(None)
            errors.append("missing latitude/longitude")
            continue
        try:
            point = GeodeticPoint(parse_degrees(lat), parse_degrees(lon), 0.0, from_datum)
            ref = NATIONAL_GRID.to_grid(point)
        except GeodesyError as e:
            refs.append(None)
            eastings.append(None)
            northings.append(None)
            errors.append(str(e))
            continue
        refs.append(format_grid_reference(ref, digits))
        eastings.append(ref.easting)
        northings.append(ref.northing)
        errors.append(None)

    _log_failures("latlon_to_gridrefs", errors)

    out = df.copy()
    out["gridref"] = refs
    out["easting"] = pd.array(eastings, dtype="Int64")
    out["northing"] = pd.array(northings, dtype="Int64")
    out["error"] = errors
    return out
