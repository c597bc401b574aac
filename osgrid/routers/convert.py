"""Conversion endpoints for grid references, datums and geocentric coordinates."""

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import DEFAULT_GRIDREF_DIGITS, RATE_LIMIT_CONVERT
from ..errors import ConvergenceError, DegenerateGeometry, GeodesyError
from ..geodesy.cartesian import CartesianPoint, GeodeticPoint, to_cartesian, to_geodetic
from ..geodesy.datums import DATUMS
from ..geodesy.national_grid import NATIONAL_GRID, GridReference
from ..geodesy.transform import default_transformer
from ..parsing import format_grid_reference, format_latlon, parse_degrees, parse_grid_reference
from ..schemas import (
    CartesianOut,
    CartesianToLatLonRequest,
    DatumConversionRequest,
    DatumConversionResponse,
    GridConversionResponse,
    GridRefOut,
    GridRefToLatLonRequest,
    LatLonOut,
    LatLonToCartesianRequest,
    LatLonToGridRefRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["conversion"])

limiter = Limiter(key_func=get_remote_address)


def _http_error(e: GeodesyError) -> HTTPException:
    if isinstance(e, ConvergenceError):
        logger.error("Inverse projection failed: %s", e)
        return HTTPException(status_code=500, detail=str(e))
    if isinstance(e, DegenerateGeometry):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


def _latlon_out(point: GeodeticPoint) -> LatLonOut:
    return LatLonOut(
        latitude=point.latitude,
        longitude=point.longitude,
        height=point.height,
        datum=point.datum.name,
        formatted=format_latlon(point),
        formatted_dms=format_latlon(point, "dms", 2),
    )


def _grid_out(ref: GridReference, digits: int) -> GridRefOut:
    return GridRefOut(
        easting=ref.easting,
        northing=ref.northing,
        gridref=format_grid_reference(ref, digits),
        numeric=format_grid_reference(ref, 0),
    )


def _grid_to_latlon(ref: GridReference, datum: str, digits: int) -> GridConversionResponse:
    try:
        point = NATIONAL_GRID.to_latlon(ref, DATUMS.get(datum))
        return GridConversionResponse(grid=_grid_out(ref, digits), latlon=_latlon_out(point))
    except GeodesyError as e:
        raise _http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/gridref/{ref}", response_model=GridConversionResponse)
@limiter.limit(RATE_LIMIT_CONVERT)
def get_gridref(
    request: Request,
    ref: str,
    datum: str = Query(default="WGS84", description="Datum for the returned lat/lon"),
    digits: int = Query(default=DEFAULT_GRIDREF_DIGITS, ge=0, le=10),
):
    """Convert a grid reference such as 'TG 51409 13177' to latitude/longitude."""
    try:
        parsed = parse_grid_reference(ref)
    except GeodesyError as e:
        raise _http_error(e) from e
    return _grid_to_latlon(parsed, datum, digits)


@router.post("/convert/gridref-to-latlon", response_model=GridConversionResponse)
@limiter.limit(RATE_LIMIT_CONVERT)
def gridref_to_latlon(request: Request, body: GridRefToLatLonRequest):
    """Convert a grid reference (text, or easting + northing) to latitude/longitude."""
    if body.gridref:
        try:
            ref = parse_grid_reference(body.gridref)
        except GeodesyError as e:
            raise _http_error(e) from e
    elif body.easting is not None and body.northing is not None:
        ref = GridReference(body.easting, body.northing)
    else:
        raise HTTPException(
            status_code=400,
            detail="Provide either 'gridref' or both 'easting' and 'northing'",
        )
    return _grid_to_latlon(ref, body.datum, body.digits)


@router.post("/convert/latlon-to-gridref", response_model=GridConversionResponse)
@limiter.limit(RATE_LIMIT_CONVERT)
def latlon_to_gridref(request: Request, body: LatLonToGridRefRequest):
    """Convert latitude/longitude on any registered datum to a grid reference."""
    try:
        point = GeodeticPoint(
            parse_degrees(body.latitude),
            parse_degrees(body.longitude),
            body.height,
            DATUMS.get(body.datum),
        )
        ref = NATIONAL_GRID.to_grid(point)
        return GridConversionResponse(grid=_grid_out(ref, body.digits), latlon=_latlon_out(point))
    except GeodesyError as e:
        raise _http_error(e) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/convert/datum", response_model=DatumConversionResponse)
@limiter.limit(RATE_LIMIT_CONVERT)
def convert_datum(request: Request, body: DatumConversionRequest):
    """Convert latitude/longitude/height from one datum to another."""
    try:
        source = GeodeticPoint(
            parse_degrees(body.latitude),
            parse_degrees(body.longitude),
            body.height,
            DATUMS.get(body.from_datum),
        )
        result = default_transformer.convert_geodetic(source, DATUMS.get(body.to_datum))
    except GeodesyError as e:
        raise _http_error(e) from e
    return DatumConversionResponse(source=_latlon_out(source), result=_latlon_out(result))


@router.post("/convert/latlon-to-cartesian", response_model=CartesianOut)
@limiter.limit(RATE_LIMIT_CONVERT)
def latlon_to_cartesian(request: Request, body: LatLonToCartesianRequest):
    """Geodetic latitude/longitude/height to geocentric x/y/z on the same datum."""
    try:
        point = GeodeticPoint(
            parse_degrees(body.latitude),
            parse_degrees(body.longitude),
            body.height,
            DATUMS.get(body.datum),
        )
        c = to_cartesian(point)
    except GeodesyError as e:
        raise _http_error(e) from e
    return CartesianOut(x=c.x, y=c.y, z=c.z, datum=c.datum.name)


@router.post("/convert/cartesian-to-latlon", response_model=LatLonOut)
@limiter.limit(RATE_LIMIT_CONVERT)
def cartesian_to_latlon(request: Request, body: CartesianToLatLonRequest):
    """Geocentric x/y/z to geodetic latitude/longitude/height on the same datum."""
    try:
        point = to_geodetic(CartesianPoint(body.x, body.y, body.z, DATUMS.get(body.datum)))
    except GeodesyError as e:
        raise _http_error(e) from e
    return _latlon_out(point)
