import logging
import time

import numpy as np

import config
import integrator
import rasterizer
from field import Field, particle_count
from input_router import CommandKind, InputRouter

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Ties the simulation to a display backend.

    Each iteration renders the field, waits for input for what is left of the
    tick, applies the resulting commands and then advances the physics by the
    time elapsed since the previous step.
    """

    def __init__(
        self,
        display,
        rng=None,
        field=None,
        recorder=None,
        tick_seconds=config.TICK_SECONDS,
        clock=time.monotonic,
    ):
        self.display = display
        self.rng = rng if rng is not None else np.random.default_rng(config.SEED)
        self.recorder = recorder
        self.tick_seconds = tick_seconds
        self.clock = clock
        self.router = InputRouter()
        self.attractor = None
        self.buffer = None

        if field is None:
            width, height = self.sub_row_size()
            if config.NUM_PARTICLES is None:
                count = particle_count(config.DENSITY, width, height)
            else:
                count = config.NUM_PARTICLES
            field = Field.generate(count, width, height, self.rng)
            logger.info(
                "Generated %d particles in %dx%d sub-rows", count, width, height
            )
        self.field = field

        now = self.clock()
        self.last_step = now
        self.last_render = now

        self.frames = 0
        self.time_render = 0.0
        self.time_integrate = 0.0

    def sub_row_size(self):
        columns, rows = self.display.size()
        return columns, rows * 2

    def render(self):
        start_time = time.perf_counter()
        self.last_render = self.clock()
        columns, rows = self.display.size()
        if self.buffer is None or self.buffer.size != (columns, rows):
            self.buffer = rasterizer.CellBuffer(columns, rows)
        rasterizer.render(self.field, self.buffer)
        self.display.draw(self.buffer)
        if self.recorder is not None:
            self.recorder.capture(self.buffer)
        self.frames += 1
        self.time_render += time.perf_counter() - start_time

    def apply(self, command):
        if command.kind is CommandKind.RESET:
            width, height = self.sub_row_size()
            self.field = self.field.regenerate(width, height, self.rng)
        elif command.kind in (CommandKind.SET_ATTRACTOR, CommandKind.UPDATE_ATTRACTOR):
            self.attractor = command.point
        elif command.kind is CommandKind.CLEAR_ATTRACTOR:
            self.attractor = None

    def step(self):
        start_time = time.perf_counter()
        now = self.clock()
        dt = max(0.0, now - self.last_step)
        self.last_step = now
        integrator.step(self.field, dt, self.attractor)
        self.time_integrate += time.perf_counter() - start_time

    def run(self):
        """Run until a quit command arrives. Returns the exit status."""
        while True:
            self.render()

            timeout = max(0.0, self.tick_seconds - (self.clock() - self.last_render))
            for event in self.display.poll(timeout):
                command = self.router.route(event)
                if command is None:
                    continue
                if command.kind is CommandKind.QUIT:
                    logger.info("Quit after %d frames", self.frames)
                    return 0
                self.apply(command)

            self.step()

    def timing_report(self):
        return (
            f"Frames: {self.frames}, "
            f"time rendering: {self.time_render:.3f} seconds, "
            f"time integrating: {self.time_integrate:.3f} seconds"
        )
