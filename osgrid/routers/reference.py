from fastapi import APIRouter, HTTPException

from ..errors import UnrecognizedDatum
from ..geodesy.datums import DATUMS
from ..geodesy.ellipsoids import ELLIPSOIDS
from ..schemas import DatumOut, EllipsoidOut

router = APIRouter(tags=["reference"])


@router.get("/datums", response_model=list[DatumOut])
def list_datums():
    """All datums in the registry, with Helmert parameters relative to the hub."""
    return [DatumOut.model_validate(DATUMS.get(name)) for name in DATUMS.names()]


@router.get("/datums/{name}", response_model=DatumOut)
def get_datum(name: str):
    try:
        datum = DATUMS.get(name)
    except UnrecognizedDatum as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return DatumOut.model_validate(datum)


@router.get("/ellipsoids", response_model=list[EllipsoidOut])
def list_ellipsoids():
    return [EllipsoidOut.model_validate(e) for e in ELLIPSOIDS.values()]
