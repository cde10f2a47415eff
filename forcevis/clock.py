import logging
import time

logger = logging.getLogger(__name__)


class FrameClock:
    """Hands out frame deltas and drops frames that arrive too late.

    A frame whose rate falls below half of `target_fps` (for 30 FPS: more
    than 1/15 s since the last accepted frame) is dropped: `tick` returns
    None and the next frame is measured from now.
    """

    def __init__(self, target_fps=30, clock=time.perf_counter):
        self.target_fps = target_fps
        self.max_dt = 2.0 / target_fps
        self.clock = clock
        self.last = None
        self.dropped = 0

    def reset(self):
        self.last = None

    def tick(self):
        now = self.clock()
        if self.last is None:
            self.last = now
            return 0.0

        dt = now - self.last
        self.last = now
        if dt > self.max_dt:
            self.dropped += 1
            logger.debug("Dropped frame: dt=%.3fs (limit %.3fs)", dt, self.max_dt)
            return None
        return max(dt, 0.0)
