from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError
from starlette.staticfiles import StaticFiles

from solver_relay.api.exception_handlers import register_exception_handlers
from solver_relay.api.schemas import HealthOut
from solver_relay.core.logging import setup_logging
from solver_relay.core.middleware.body_limit import BodySizeLimitMiddleware
from solver_relay.core.middleware.http_logging import HttpLoggingMiddleware
from solver_relay.core.settings import Settings, get_settings
from solver_relay.solve.router import router as solve_router

setup_logging()
logger = logging.getLogger("solver_relay")


def _mount_public_assets(app: FastAPI, settings: Settings) -> None:
    if any(getattr(route, "name", None) == "public" for route in app.routes):
        return
    static_dir = Path(settings.static_dir).expanduser().resolve()
    if not static_dir.is_dir():
        logger.warning("Public asset directory not found; static serving disabled")
        return
    # Mounted last so /api and /health keep precedence over files.
    app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="public")


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Defer settings/env access until application startup so importing the module
        # never requires GEMINI_API_KEY. A missing key fails startup here.
        settings = get_settings()
        _mount_public_assets(app, settings)
        yield

    app = FastAPI(
        title="Solver.AI Relay",
        description=(
            "Backend relay between the Solver.AI front-end and the Gemini API.\n\n"
            "Design principles:\n"
            "- The API key lives only on the server and is injected into upstream calls.\n"
            "- `contents` is opaque: the relay checks it exists and forwards it untouched.\n"
            "- Every failure is reported as a generic `{error}`; upstream details stay in "
            "server logs."
        ),
        lifespan=lifespan,
        docs_url="/swagger",
        redoc_url=None,
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {
                "name": "solve",
                "description": "Relay a question to the AI service and return its text answer.",
            },
        ],
    )

    app.add_middleware(BodySizeLimitMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "This endpoint intentionally does not call the AI service."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(solve_router)
    return app


app = create_app()


def main() -> None:
    """Console entry point: validate configuration, then serve."""

    try:
        settings = get_settings()
    except ValidationError as exc:
        # Field names only; input values could be secrets.
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        logger.critical(
            f"FATAL ERROR: invalid configuration ({', '.join(fields)}). Is GEMINI_API_KEY set?",
            extra={"error_type": "configuration"},
        )
        raise SystemExit(1) from None

    logger.info(f"Starting server on http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
