"""FastAPI application entrypoint."""

import os

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.api.routes import plots
from backend.api.routes import soil_data
from backend.errors import NotFoundError, UnexpectedFailure, ValidationFailure
from backend.services import logger

CORS_ENV_VAR = "SOILDATA_CORS_ORIGINS"


def get_cors_origins() -> list[str]:
    raw = os.environ.get(CORS_ENV_VAR, "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(
    title="Soil Data API",
    description="Record management for soil moisture, pH and temperature readings",
    version="0.1.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.include_router(soil_data.router, prefix="/api/soildatas", tags=["soil-data"])
app.include_router(plots.router, prefix="/api/plots", tags=["plots"])


@app.exception_handler(NotFoundError)
async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ValidationFailure)
async def handle_validation_failure(request: Request, exc: ValidationFailure) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())


@app.exception_handler(UnexpectedFailure)
async def handle_unexpected_failure(request: Request, exc: UnexpectedFailure) -> JSONResponse:
    # The cause was logged where it was raised; keep internals out of the body.
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


@app.exception_handler(Exception)
async def handle_unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error on %s %s (path params=%s)",
        request.method,
        request.url.path,
        request.path_params,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/health", tags=["health"])
def healthcheck() -> dict[str, str]:
    """Simple health endpoint for uptime probes."""
    return {"status": "ok"}
