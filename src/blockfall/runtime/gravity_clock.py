# src/blockfall/runtime/gravity_clock.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GravityClock:
    """
    Turns elapsed frame time into gravity ticks.

    The engine never sees time. The driver feeds frame deltas in and calls
    engine.gravity_tick() once per tick this returns. While `accelerated` is set the
    shorter period applies; switching periods keeps the accumulated time.
    """

    gravity_ms: int = 1000
    accelerated_gravity_ms: int = 50
    max_ticks_per_frame: int = 20

    _acc_ms: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        if int(self.gravity_ms) <= 0 or int(self.accelerated_gravity_ms) <= 0:
            raise ValueError(
                f"gravity periods must be positive, got {self.gravity_ms} / {self.accelerated_gravity_ms}"
            )
        if int(self.max_ticks_per_frame) <= 0:
            raise ValueError(f"max_ticks_per_frame must be >= 1, got {self.max_ticks_per_frame}")

    def interval_ms(self, *, accelerated: bool) -> int:
        return int(self.accelerated_gravity_ms) if accelerated else int(self.gravity_ms)

    def advance(self, dt_ms: float, *, accelerated: bool) -> int:
        """
        Add dt_ms of wall time and return the number of ticks now due.

        Ticks beyond max_ticks_per_frame are dropped (a stalled frame must not dump
        the piece to the floor in one go).
        """
        if dt_ms < 0:
            raise ValueError(f"dt_ms must be >= 0, got {dt_ms}")
        self._acc_ms += float(dt_ms)
        step = float(self.interval_ms(accelerated=accelerated))

        ticks = int(self._acc_ms // step)
        if ticks <= 0:
            return 0
        self._acc_ms -= ticks * step
        if ticks > int(self.max_ticks_per_frame):
            ticks = int(self.max_ticks_per_frame)
            self._acc_ms = 0.0
        return ticks

    def reset(self) -> None:
        self._acc_ms = 0.0

    def pending_ms(self) -> float:
        return float(self._acc_ms)


__all__ = ["GravityClock"]
