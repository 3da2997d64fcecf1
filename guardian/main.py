import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from guardian.core.errors import GuardianError
from guardian.core.logger import configure_logging, logger
from guardian.core.settings import get_settings
from guardian.routers.auth import router as auth_router
from guardian.routers.events import router as events_router
from guardian.routers.hazards import router as hazards_router
from guardian.routers.users import router as users_router
from guardian.startup import register_startup

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name)

register_startup(app)


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client, status and latency. Bodies are never logged."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            request.client.host if request.client else "unknown",
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(_RequestLogMiddleware)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(GuardianError)
async def guardian_error_handler(request: Request, exc: GuardianError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Server error on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(auth_router, tags=["auth"])
app.include_router(users_router, tags=["users"])
app.include_router(events_router, tags=["events"])
app.include_router(hazards_router, tags=["hazards"])


@app.get("/health")
def health_check():
    return {"status": "ok"}
