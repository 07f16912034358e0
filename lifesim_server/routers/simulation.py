"""Simulation state, statistics and control endpoints."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from lifesim_server.models import CommandRequest, CommandResponse, StatusResponse
from lifesim_server.simulation_runner import SimulationRunner

logger = logging.getLogger(__name__)


def setup_router(runner: SimulationRunner) -> APIRouter:
    """Create the simulation router bound to a runner.

    Args:
        runner: The SimulationRunner serving the engine

    Returns:
        Configured APIRouter
    """
    router = APIRouter(prefix="/api", tags=["simulation"])

    @router.get("/state")
    async def get_state() -> Response:
        """Full world snapshot: organisms, food, obstacles, particles, stats."""
        return Response(content=runner.serialize_state(), media_type="application/json")

    @router.get("/stats")
    async def get_stats() -> Dict[str, Any]:
        """Primary and derived statistics plus a recent history summary."""
        return runner.get_stats()

    @router.get("/status", response_model=StatusResponse)
    async def get_status():
        return StatusResponse(**runner.get_status())

    @router.post("/commands", response_model=CommandResponse)
    async def post_command(request: CommandRequest):
        """Queue a control command for the next frame.

        Unknown commands and invalid payloads are rejected with 400.
        """
        result = await runner.handle_command_async(request.command, request.data)
        if not result.get("success"):
            return JSONResponse(status_code=400, content=result)
        return CommandResponse(**result)

    return router
