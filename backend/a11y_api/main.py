import os
import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .ratelimit import RateLimiter
from .routers import accessibility

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

VERSION = "1.0.0"
NOT_FOUND_MESSAGE = "Specified endpoint not found."

app = FastAPI(
    title="Accessibility Compliance API",
    description="Static WCAG accessibility linter for HTML markup",
    version=VERSION,
)

rate_limiter = RateLimiter()


def _get_cors_origins() -> list:
    """Comma-separated CORS_ORIGINS; any origin when unset or '*'."""
    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    if not origins or "*" in origins:
        return ["*"]
    return origins


def error_response(status_code: int, message: str, data=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "success": False,
            "message": message,
            "data": jsonable_encoder(data if data is not None else []),
        },
        headers=headers,
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "X-Requested-With"],
)


@app.middleware("http")
async def throttle_api(request: Request, call_next):
    if request.url.path.startswith("/api/") and request.method != "OPTIONS":
        client = request.client.host if request.client else "unknown"
        retry_after = rate_limiter.hit(client)
        if retry_after is not None:
            logger.warning("Rate limit exceeded for %s on %s", client, request.url.path)
            return error_response(
                429, "Too many requests. Please slow down.",
                headers={"Retry-After": str(retry_after)},
            )
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = NOT_FOUND_MESSAGE
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
    return error_response(422, "The given data was invalid.", data=exc.errors())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return error_response(500, "Internal server error.")


app.include_router(accessibility.router)


@app.get("/health")
def health():
    return {"status": "healthy", "version": VERSION}


@app.get("/")
def root():
    return {"name": "Accessibility Compliance API", "version": VERSION, "docs": "/docs"}
