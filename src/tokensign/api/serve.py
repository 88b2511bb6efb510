"""API server for ``tokensign serve``.

Builds a FastAPI app exposing the versioned ``/api/v1/`` token routers. The
app owns exactly one Signer, created from settings when the app is built.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tokensign.config import Settings, get_settings
from tokensign.errors import ErrorKind, TokenError

logger = logging.getLogger(__name__)

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_SIGNATURE: 401,
    ErrorKind.SIGNATURE_EXPIRED: 401,
    ErrorKind.DECODING: 422,
    ErrorKind.ENCODING: 422,
    ErrorKind.INVALID_KEY: 500,
    ErrorKind.INVALID_CONFIG: 500,
}


async def _token_error_handler(request: Request, exc: TokenError) -> JSONResponse:
    status = _STATUS_BY_KIND.get(exc.kind, 400)
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.kind.value)
    return JSONResponse(status_code=status, content={"detail": str(exc), "code": exc.kind.value})


def create_api_app(settings: Settings | None = None, key: str | bytes | None = None) -> FastAPI:
    """Build the FastAPI application with its own Signer.

    *key* overrides the configured secret key.
    """
    from tokensign.api.v1 import mount_v1_routers

    settings = settings or get_settings()

    app = FastAPI(
        title="tokensign API",
        description="Sign and verify time-limited tokens.",
        version="1.0.0",
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )
    app.state.signer = settings.build_signer(key)
    app.state.api_token = (
        settings.api_token.get_secret_value() if settings.api_token is not None else None
    )
    app.state.default_max_age = settings.max_age
    app.add_exception_handler(TokenError, _token_error_handler)

    mount_v1_routers(app)
    return app


def run_api_server(
    host: str = "127.0.0.1",
    port: int = 8899,
    key: str | bytes | None = None,
    settings: Settings | None = None,
) -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    app = create_api_app(settings, key=key)
    if app.state.api_token is None:
        logger.warning("No API token configured; POST /api/v1/tokens/sign is disabled")
    logger.info("API docs: http://%s:%s/api/v1/docs", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)
