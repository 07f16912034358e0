"""Background simulation runner thread."""

import asyncio
import logging
import threading
import time
from typing import Any, Dict, Optional

import orjson

from lifesim.config.arena import FRAME_RATE
from lifesim.config.simulation_config import SimulationConfig
from lifesim.exceptions import CommandError
from lifesim.simulation import Command, SimulationEngine, WorldSnapshot

logger = logging.getLogger(__name__)

STATUS_LOG_INTERVAL = 5.0


class SimulationRunner:
    """Runs the engine in a background thread and serves its state.

    The engine is only touched while holding ``lock``. Commands from clients
    are validated immediately but applied by the engine at the start of its
    next frame.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        config: Optional[SimulationConfig] = None,
        frame_rate: int = FRAME_RATE,
    ) -> None:
        """Initialize the runner and populate the arena.

        Args:
            seed: Optional random seed for deterministic behavior
            config: Simulation configuration (production defaults if None)
            frame_rate: Target frames per second for the loop
        """
        self.engine = SimulationEngine(config, seed=seed)
        self.engine.setup()

        self.frame_rate = frame_rate
        self.frame_time = 1.0 / frame_rate
        self.running = False
        self.thread: Optional[threading.Thread] = None
        self.lock = threading.Lock()

        self.frame_count = 0
        self.fps_frame_count = 0
        self.last_fps_time = time.time()
        self.current_actual_fps = 0.0

    def start(self, start_paused: bool = False) -> None:
        """Start the simulation loop in a daemon thread."""
        if self.running:
            return
        with self.lock:
            self.engine.paused = start_paused
        self.running = True
        self.thread = threading.Thread(target=self._run_loop, name="lifesim-runner", daemon=True)
        self.thread.start()

    def stop(self) -> None:
        self.running = False
        if self.thread:
            self.thread.join(timeout=2.0)
            self.thread = None

    def step(self) -> int:
        """Advance one frame under the lock. Returns the number of ticks run."""
        with self.lock:
            ticks = self.engine.advance_frame()
        self.frame_count += 1
        return ticks

    def _run_loop(self) -> None:
        """Main loop with drift-corrected frame pacing."""
        logger.info("Simulation loop: Starting")
        next_frame_start_time = time.time()

        try:
            while self.running:
                next_frame_start_time += self.frame_time
                try:
                    self.step()
                except Exception as e:
                    logger.error(
                        "Simulation loop: Error at frame %d: %s", self.frame_count, e, exc_info=True
                    )

                self._maybe_log_status()

                sleep_time = next_frame_start_time - time.time()
                if sleep_time > 0:
                    time.sleep(sleep_time)
                elif sleep_time < -0.1:
                    # Too far behind; resync instead of running zero-delay frames
                    next_frame_start_time = time.time()
        except Exception as e:
            logger.error("Simulation loop: Fatal error, loop exiting: %s", e, exc_info=True)
        finally:
            logger.info("Simulation loop: Ended after %d frames", self.frame_count)

    def _maybe_log_status(self) -> None:
        self.fps_frame_count += 1
        now = time.time()
        if now - self.last_fps_time < STATUS_LOG_INTERVAL:
            return
        self.current_actual_fps = self.fps_frame_count / (now - self.last_fps_time)
        self.fps_frame_count = 0
        self.last_fps_time = now
        with self.lock:
            stats = self.engine.stats
        logger.info(
            "Simulation Status FPS=%.1f, Tick=%d, Population=%d (H=%d O=%d C=%d), Food=%d, Gen=%d",
            self.current_actual_fps,
            stats.tick,
            stats.total_population,
            stats.herbivore_count,
            stats.omnivore_count,
            stats.carnivore_count,
            stats.food_count,
            stats.max_generation,
        )

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def get_snapshot(self) -> WorldSnapshot:
        with self.lock:
            return self.engine.snapshot()

    def serialize_state(self) -> bytes:
        """Full world snapshot as JSON bytes."""
        return orjson.dumps(self.get_snapshot().to_dict())

    def get_stats(self) -> Dict[str, Any]:
        with self.lock:
            return {
                "stats": self.engine.get_stats(),
                "history": self.engine.stats_tracker.get_time_series_summary(),
            }

    def get_status(self) -> Dict[str, Any]:
        with self.lock:
            engine = self.engine
            return {
                "running": self.running,
                "paused": engine.paused,
                "tick": engine.tick_count,
                "speed": engine.speed,
                "placement_mode": engine.placement_mode.value,
                "population": len(engine.organisms),
                "food_count": len(engine.food),
                "obstacle_count": len(engine.obstacles),
                "fps": self.current_actual_fps,
                "is_day": engine.time_system.is_day(),
            }

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _create_error_response(self, error_msg: str) -> Dict[str, Any]:
        return {"success": False, "error": error_msg}

    def handle_command(self, command: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Validate a client command and queue it for the next frame.

        Args:
            command: Command name, e.g. ``"pause"`` or ``"place"``
            data: Command payload

        Returns:
            ``{"success": True, ...}`` or an error response
        """
        try:
            cmd = Command.from_request(command, data)
        except CommandError as e:
            logger.warning("Rejected command %r: %s", command, e)
            return self._create_error_response(str(e))

        with self.lock:
            self.engine.submit(cmd)
            queued = len(self.engine.commands)
        return {"success": True, "command": cmd.type.value, "queued": queued}

    async def handle_command_async(
        self, command: str, data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Async wrapper that keeps the lock off the event loop thread."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.handle_command, command, data)
