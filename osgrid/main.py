import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from .config import CORS_ORIGINS, LOG_LEVEL, RATE_LIMIT_DEFAULT
from .errors import GeodesyError
from .geodesy.national_grid import NATIONAL_GRID, GridReference
from .routers import convert, reference, spherical

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Rate limiter
limiter = Limiter(key_func=get_remote_address, default_limits=[RATE_LIMIT_DEFAULT])

app = FastAPI(
    title="OS Grid Reference API",
    description="Conversion between OS National Grid references, lat/lon on historical and global datums, and geocentric coordinates.",
    version="1.0.0",
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(GeodesyError)
async def geodesy_error_handler(request: Request, exc: GeodesyError):
    logger.warning("Unhandled conversion error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reference.router, prefix="/api/v1")
app.include_router(convert.router, prefix="/api/v1")
app.include_router(spherical.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    """Health check — runs one known grid conversion end to end."""
    try:
        point = NATIONAL_GRID.to_latlon(GridReference(651409, 313177))
        ok = abs(point.latitude - 52.657977) < 1e-4 and abs(point.longitude - 1.716020) < 1e-4
        conversion_status = "ok" if ok else "error: unexpected result"
    except Exception as e:
        logger.exception("Health check conversion failed")
        conversion_status = f"error: {e}"

    return {
        "status": "ok" if conversion_status == "ok" else "degraded",
        "version": app.version,
        "conversion": conversion_status,
    }


@app.get("/")
def root():
    return {
        "message": "OS Grid Reference API",
        "docs": "/docs",
    }
