from backend.engine.scheduler.scheduler import (
    ManualClock,
    Scheduler,
    SimulatedScheduler,
    TimerHandle,
)

__all__ = ["ManualClock", "Scheduler", "SimulatedScheduler", "TimerHandle"]
