from forcevis.clock import FrameClock


class FakeClock:
    def __init__(self, times):
        self.times = list(times)

    def __call__(self):
        return self.times.pop(0)


def test_first_tick_is_zero():
    clock = FrameClock(30, clock=FakeClock([5.0]))
    assert clock.tick() == 0.0


def test_regular_frames():
    clock = FrameClock(30, clock=FakeClock([0.0, 0.033, 0.070]))
    clock.tick()
    assert clock.tick() == 0.033
    assert abs(clock.tick() - 0.037) < 1e-9


def test_late_frame_is_dropped():
    # 30 FPS drops anything slower than 15 FPS
    clock = FrameClock(30, clock=FakeClock([0.0, 0.5, 0.53]))
    clock.tick()
    assert clock.tick() is None
    assert clock.dropped == 1
    # Measured from the dropped frame, not from the stall
    assert abs(clock.tick() - 0.03) < 1e-9


def test_limit_is_inclusive():
    clock = FrameClock(30, clock=FakeClock([0.0, 2.0 / 30]))
    clock.tick()
    assert clock.tick() == 2.0 / 30


def test_reset():
    clock = FrameClock(30, clock=FakeClock([0.0, 10.0]))
    clock.tick()
    clock.reset()
    assert clock.tick() == 0.0
