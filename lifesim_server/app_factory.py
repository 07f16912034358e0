"""Application factory and context for the life simulation API.

Runtime state lives on an ``AppContext`` attached to ``app.state`` rather
than in module globals, so each test can build an app with its own runner.

Usage:
------
    # Production (settings from environment)
    app = create_app()

    # Testing (runner that does not tick on its own)
    context = AppContext(runner=SimulationRunner(seed=1), autostart=False)
    app = create_app(context=context)
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lifesim_server.logging_config import configure_logging
from lifesim_server.models import HealthResponse
from lifesim_server.simulation_runner import SimulationRunner

DEFAULT_API_PORT = 8000


def _env_seed() -> Optional[int]:
    raw = os.getenv("LIFESIM_SEED")
    return int(raw) if raw else None


@dataclass
class AppContext:
    """Runtime context holding all application state."""

    runner: Optional[SimulationRunner] = None
    seed: Optional[int] = field(default_factory=_env_seed)
    autostart: bool = field(
        default_factory=lambda: os.getenv("LIFESIM_AUTOSTART", "true").lower() == "true"
    )
    api_port: int = field(
        default_factory=lambda: int(os.getenv("LIFESIM_API_PORT", str(DEFAULT_API_PORT)))
    )
    allowed_origins: list = field(
        default_factory=lambda: os.getenv("ALLOWED_ORIGINS", "*").split(",")
    )
    server_start_time: float = field(default_factory=time.time)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("lifesim.server"))

    def get_runner(self) -> SimulationRunner:
        """Return the runner, creating it on first use."""
        if self.runner is None:
            self.runner = SimulationRunner(seed=self.seed)
        return self.runner


def create_app(*, seed: Optional[int] = None, context: Optional[AppContext] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        seed: Override the simulation seed (default: LIFESIM_SEED env var)
        context: Pre-configured AppContext (for testing)

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    logger = configure_logging(extra_loggers=("lifesim",))

    if context is None:
        context = AppContext()
    if seed is not None:
        context.seed = seed
    context.logger = logger
    runner = context.get_runner()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx = app.state.context
        try:
            if ctx.autostart:
                runner.start()
                ctx.logger.info("Simulation runner started")
            yield
            ctx.logger.info("LIFESPAN: Received shutdown signal")
        except Exception as e:
            ctx.logger.error("Exception in lifespan: %s", e, exc_info=True)
            raise
        finally:
            runner.stop()

    app = FastAPI(title="Life Simulation API", lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    _setup_routers(app, context)
    return app


def _setup_routers(app: FastAPI, ctx: AppContext) -> None:
    """Include all API routers and the health check."""
    from lifesim_server.routers import simulation

    app.include_router(simulation.setup_router(ctx.get_runner()))

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="ok", uptime_seconds=time.time() - ctx.server_start_time)
