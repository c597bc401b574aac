"""Great-circle geometry endpoints on a spherical earth."""

from fastapi import APIRouter, HTTPException

from ..geodesy import spherical
from ..schemas import (
    AreaRequest,
    AreaResponse,
    DestinationRequest,
    DistanceResponse,
    IntersectionRequest,
    IntersectionResponse,
    MidpointRequest,
    PathRequest,
    PointOut,
)

router = APIRouter(prefix="/spherical", tags=["spherical"])


@router.post("/distance", response_model=DistanceResponse)
def distance(body: PathRequest):
    """Great-circle distance and initial/final bearings between two points."""
    a, b = body.start, body.end
    return DistanceResponse(
        distance_m=spherical.distance(a.latitude, a.longitude, b.latitude, b.longitude, body.radius),
        initial_bearing=spherical.initial_bearing(a.latitude, a.longitude, b.latitude, b.longitude),
        final_bearing=spherical.final_bearing(a.latitude, a.longitude, b.latitude, b.longitude),
    )


@router.post("/midpoint", response_model=PointOut)
def midpoint(body: MidpointRequest):
    """Point at a fraction (default halfway) along the great circle between two points."""
    a, b = body.start, body.end
    try:
        if body.fraction == 0.5:
            lat, lon = spherical.midpoint(a.latitude, a.longitude, b.latitude, b.longitude)
        else:
            lat, lon = spherical.intermediate_point(
                a.latitude, a.longitude, b.latitude, b.longitude, body.fraction,
            )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return PointOut(latitude=lat, longitude=lon)


@router.post("/destination", response_model=PointOut)
def destination(body: DestinationRequest):
    lat, lon = spherical.destination_point(
        body.start.latitude, body.start.longitude, body.distance_m, body.bearing, body.radius,
    )
    return PointOut(latitude=lat, longitude=lon)


@router.post("/intersection", response_model=IntersectionResponse)
def intersection(body: IntersectionRequest):
    result = spherical.intersection(
        body.first.latitude, body.first.longitude, body.first_bearing,
        body.second.latitude, body.second.longitude, body.second_bearing,
    )
    if result is None:
        return IntersectionResponse(intersects=False)
    return IntersectionResponse(intersects=True, point=PointOut(latitude=result[0], longitude=result[1]))


@router.post("/area", response_model=AreaResponse)
def area(body: AreaRequest):
    """Area of a polygon with great-circle sides; open or closed vertex lists."""
    vertices = [(p.latitude, p.longitude) for p in body.polygon]
    try:
        value = spherical.area(vertices, body.radius)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return AreaResponse(area_m2=value, vertices=len(vertices))
