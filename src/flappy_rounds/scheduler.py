"""
scheduler.py: Fixed-period task driver for the physics and spawn loops.

Nothing here sleeps or spawns threads. The owner feeds elapsed wall time into
``Scheduler.advance`` (the pygame client passes ``clock.tick()``), and every
callback runs synchronously on the caller's thread, one at a time.
"""

from typing import Callable, Dict, List, Optional

from .logger import get_logger

log = get_logger("scheduler")


class PeriodicTask:
    """A named callback that fires every ``interval_ms`` while running."""

    def __init__(self, name: str, interval_ms: int, callback: Callable[[], None]):
        if interval_ms <= 0:
            raise ValueError(f"interval for task {name!r} must be positive, got {interval_ms}")
        self.name = name
        self.interval_ms = interval_ms
        self.callback = callback
        self.running = False
        self.remaining_ms = interval_ms
        self.fire_count = 0

    def start(self):
        """Start the timer. The first firing is one full interval away. No-op if running."""
        if self.running:
            return
        self.running = True
        self.remaining_ms = self.interval_ms
        log.debug(f"Task {self.name} started")

    def stop(self):
        """Stop the timer. No-op if already stopped."""
        if not self.running:
            return
        self.running = False
        log.debug(f"Task {self.name} stopped")

    def fire(self):
        self.fire_count += 1
        self.callback()


class Scheduler:
    """
    Owns a set of periodic tasks and advances them in chronological order.

    When two tasks are due at the same instant they fire in registration
    order. A callback may stop any task, including one that was due later in
    the same ``advance`` call; a stopped task never fires.
    """

    def __init__(self):
        self.tasks: Dict[str, PeriodicTask] = {}

    def add(self, name: str, interval_ms: int, callback: Callable[[], None]) -> PeriodicTask:
        if name in self.tasks:
            raise ValueError(f"task {name!r} is already registered")
        task = PeriodicTask(name, interval_ms, callback)
        self.tasks[name] = task
        return task

    def get(self, name: str) -> Optional[PeriodicTask]:
        return self.tasks.get(name)

    def running_tasks(self) -> List[PeriodicTask]:
        return [t for t in self.tasks.values() if t.running]

    def stop_all(self):
        for task in self.tasks.values():
            task.stop()

    def advance(self, elapsed_ms: float) -> int:
        """
        Moves the clock forward by ``elapsed_ms`` and fires every callback that
        comes due, earliest first. Returns the number of callbacks fired.
        """
        fired = 0
        budget = elapsed_ms
        while True:
            due = self.running_tasks()
            if not due:
                break
            task = min(due, key=lambda t: t.remaining_ms)
            if task.remaining_ms > budget:
                break

            step = task.remaining_ms
            budget -= step
            for other in due:
                other.remaining_ms -= step
            task.remaining_ms = task.interval_ms
            task.fire()
            fired += 1

        # Time left over that did not reach any deadline still counts down.
        for task in self.running_tasks():
            task.remaining_ms -= budget
        return fired
