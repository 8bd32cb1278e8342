from __future__ import annotations

"""FastAPI entrypoint for the embedded (page URL) environment.

The page URL a browser requests is the only configuration input here:
its query string is resolved with the same fail-soft rules a page would use.

Run locally:
    python -m uvicorn api:app --host 127.0.0.1 --port 8000 --reload

Request example:
    GET /config?module=cargo&module=weblog&speed-factor=2
"""

import logging

from fastapi import FastAPI, Request
from pydantic import BaseModel

from core.config import VERSION, Settings
from core.exit_policy import RuntimeState, should_exit
from core.resolver import UrlResolver
from core.runtime import configure_logging
from modules import ALL_MODULES, ModuleRegistry


class HealthResponse(BaseModel):
    status: str
    modules: int


class ConfigResponse(BaseModel):
    modules: list[str]
    speed_factor: float
    instant_print_lines: int


class ExitResponse(BaseModel):
    should_exit: bool
    modules_ran: int


class RunsResponse(BaseModel):
    modules_ran: int


def create_app(
    registry: ModuleRegistry | None = None,
    state: RuntimeState | None = None,
) -> FastAPI:
    """Create FastAPI app.

    Optional registry/state injection keeps tests independent of process state.
    """
    logger = logging.getLogger("genact.api")

    if registry is None:
        configure_logging(Settings.from_env())
        registry = ALL_MODULES
    if state is None:
        state = RuntimeState()

    app = FastAPI(
        title="genact",
        version=VERSION,
    )

    # `app.state` keeps shared runtime objects.
    app.state.registry = registry
    app.state.runtime = state

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", modules=len(app.state.registry))

    @app.get("/modules")
    async def modules() -> dict[str, str]:
        return app.state.registry.describe()

    @app.get("/config", response_model=ConfigResponse)
    async def config(request: Request) -> ConfigResponse:
        resolved = UrlResolver(app.state.registry, str(request.url)).resolve()
        logger.info("/config resolved: modules=%s speed_factor=%s", len(resolved.modules), resolved.speed_factor)
        return ConfigResponse(
            modules=list(resolved.modules),
            speed_factor=resolved.speed_factor,
            instant_print_lines=resolved.instant_print_lines,
        )

    @app.get("/should-exit", response_model=ExitResponse)
    async def should_exit_now(request: Request) -> ExitResponse:
        # A page never stops on its own; the answer is always False.
        resolved = UrlResolver(app.state.registry, str(request.url)).resolve()
        return ExitResponse(
            should_exit=should_exit(resolved, app.state.runtime),
            modules_ran=app.state.runtime.modules_ran(),
        )

    @app.post("/runs", response_model=RunsResponse)
    async def record_run() -> RunsResponse:
        total = app.state.runtime.record_run()
        logger.debug("/runs recorded: modules_ran=%s", total)
        return RunsResponse(modules_ran=total)

    return app


# ASGI app instance used by uvicorn.
app = create_app()
