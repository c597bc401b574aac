from typing import Optional, Union

from pydantic import BaseModel, Field

from .config import DEFAULT_GRIDREF_DIGITS

# Latitudes/longitudes may be sent as numbers or as strings such as
# "51°28′40.37″N" or "0 0 5.29 W"
Degrees = Union[float, str]


# --- Reference data ---

class EllipsoidOut(BaseModel):
    name: str
    a: float
    b: float
    f: float

    model_config = {"from_attributes": True}


class HelmertOut(BaseModel):
    tx: float
    ty: float
    tz: float
    s: float
    rx: float
    ry: float
    rz: float

    model_config = {"from_attributes": True}


class DatumOut(BaseModel):
    name: str
    ellipsoid: EllipsoidOut
    transform: HelmertOut
    is_hub: bool = False

    model_config = {"from_attributes": True}


# --- Points ---

class LatLonOut(BaseModel):
    latitude: float
    longitude: float
    height: float = 0.0
    datum: str
    formatted: str
    formatted_dms: str


class GridRefOut(BaseModel):
    easting: int
    northing: int
    gridref: str
    numeric: str


class CartesianOut(BaseModel):
    x: float
    y: float
    z: float
    datum: str


# --- Conversion requests/responses ---

class GridRefToLatLonRequest(BaseModel):
    gridref: Optional[str] = None
    easting: Optional[int] = None
    northing: Optional[int] = None
    datum: str = "WGS84"
    digits: int = Field(default=DEFAULT_GRIDREF_DIGITS, ge=0, le=10)


class LatLonToGridRefRequest(BaseModel):
    latitude: Degrees
    longitude: Degrees
    height: float = 0.0
    datum: str = "WGS84"
    digits: int = Field(default=DEFAULT_GRIDREF_DIGITS, ge=0, le=10)


class GridConversionResponse(BaseModel):
    grid: GridRefOut
    latlon: LatLonOut


class DatumConversionRequest(BaseModel):
    latitude: Degrees
    longitude: Degrees
    height: float = 0.0
    from_datum: str = "WGS84"
    to_datum: str


class DatumConversionResponse(BaseModel):
    source: LatLonOut
    result: LatLonOut


class LatLonToCartesianRequest(BaseModel):
    latitude: Degrees
    longitude: Degrees
    height: float = 0.0
    datum: str = "WGS84"


class CartesianToLatLonRequest(BaseModel):
    x: float
    y: float
    z: float
    datum: str = "WGS84"


# --- Spherical geometry ---

class PointIn(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class PointOut(BaseModel):
    latitude: float
    longitude: float


class PathRequest(BaseModel):
    start: PointIn
    end: PointIn
    radius: float = Field(default=6_371_000.0, gt=0)


class DistanceResponse(BaseModel):
    distance_m: float
    initial_bearing: float
    final_bearing: float


class MidpointRequest(BaseModel):
    start: PointIn
    end: PointIn
    fraction: float = Field(default=0.5, ge=0, le=1)


class DestinationRequest(BaseModel):
    start: PointIn
    distance_m: float
    bearing: float
    radius: float = Field(default=6_371_000.0, gt=0)


class IntersectionRequest(BaseModel):
    first: PointIn
    first_bearing: float
    second: PointIn
    second_bearing: float


class IntersectionResponse(BaseModel):
    intersects: bool
    point: Optional[PointOut] = None


class AreaRequest(BaseModel):
    polygon: list[PointIn] = Field(min_length=2)
    radius: float = Field(default=6_371_000.0, gt=0)


class AreaResponse(BaseModel):
    area_m2: float
    vertices: int
