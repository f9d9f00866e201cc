"""The dining philosophers simulation: philosopher threads and a monitor."""

from __future__ import annotations

import sys
import threading
import time
from enum import Enum
from typing import TextIO

from philosophers.args import Settings

_POLL_INTERVAL = 0.0001


class Status(str, Enum):
    """State changes that are reported on the output stream."""

    THINKING = "is thinking"
    EATING = "is eating"
    SLEEPING = "is sleeping"
    FORK = "has taken a fork"
    DIED = "died"


def current_time_ms() -> int:
    """Return wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


class Philosopher:
    """One diner, sharing a fork with each neighbour."""

    def __init__(
        self,
        ident: int,
        left_fork: threading.Lock,
        right_fork: threading.Lock,
        simulation: Simulation,
    ) -> None:
        self.id = ident
        self.left_fork = left_fork
        self.right_fork = right_fork
        self.simulation = simulation
        self.meals_eaten = 0
        self.last_meal_time = simulation.start_time

    def _last_meal(self) -> int:
        with self.simulation.meal_time_lock:
            return self.last_meal_time

    def has_died(self) -> bool:
        """Report death if the philosopher has starved; announce it only once."""
        sim = self.simulation
        now = current_time_ms()
        if now - self._last_meal() <= sim.settings.time_to_die:
            return False
        with sim.stop_lock:
            first = not sim.stop_flag
            sim.stop_flag = True
        if first:
            sim.emit(now, self.id, Status.DIED)
        return True

    def eat(self) -> None:
        """Record the meal start, eat for ``time_to_eat`` and count the meal."""
        sim = self.simulation
        if sim.stopped():
            return
        with sim.meal_time_lock:
            self.last_meal_time = current_time_ms()
        sim.print_status(self, Status.EATING)
        sim.sleep_for(sim.settings.time_to_eat)
        with sim.eating_lock:
            self.meals_eaten += 1

    def take_forks(self) -> None:
        """Pick up both forks; even ids start left, odd ids start right."""
        if self.id % 2 == 0:
            first, second = self.left_fork, self.right_fork
        else:
            first, second = self.right_fork, self.left_fork
        first.acquire()
        self.simulation.print_status(self, Status.FORK)
        second.acquire()
        self.simulation.print_status(self, Status.FORK)

    def release_forks(self) -> None:
        """Put both forks back on the table."""
        self.right_fork.release()
        self.left_fork.release()

    def should_wait(self) -> bool:
        """Yield to a neighbour who has gone longer without eating."""
        sim = self.simulation
        count = len(sim.philosophers)
        left = sim.philosophers[(self.id - 2 + count) % count]
        right = sim.philosophers[self.id % count]
        mine = self._last_meal()
        left_time = left._last_meal()
        right_time = right._last_meal()
        if sim.stopped():
            return False
        return mine > left_time or mine > right_time

    def run(self) -> None:
        """Thread body: think, eat and sleep until the simulation stops."""
        sim = self.simulation
        if self.id % 2 == 0:
            time.sleep(_POLL_INTERVAL)
        if len(sim.philosophers) == 1:
            sim.print_status(self, Status.THINKING)
            with self.left_fork:
                sim.print_status(self, Status.FORK)
                sim.sleep_for(sim.settings.time_to_die)
                self.has_died()
            return
        while not sim.stopped():
            sim.print_status(self, Status.THINKING)
            while self.should_wait():
                time.sleep(_POLL_INTERVAL)
            self.take_forks()
            try:
                self.eat()
            finally:
                self.release_forks()
            if sim.stopped():
                break
            sim.print_status(self, Status.SLEEPING)
            sim.sleep_for(sim.settings.time_to_sleep)
            time.sleep(_POLL_INTERVAL)


class Simulation:
    """Shared table state, forks and locks for a run of the simulation."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        self.settings = settings
        self._out = out
        self.print_lock = threading.Lock()
        self.eating_lock = threading.Lock()
        self.stop_lock = threading.Lock()
        self.meal_time_lock = threading.Lock()
        self.stop_flag = False
        self.start_time = current_time_ms()
        count = settings.num_philosophers
        self.forks = [threading.Lock() for _ in range(count)]
        self.philosophers = [
            Philosopher(i + 1, self.forks[i], self.forks[(i + 1) % count], self)
            for i in range(count)
        ]

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def stopped(self) -> bool:
        """Return whether the simulation has been told to stop."""
        with self.stop_lock:
            return self.stop_flag

    def stop(self) -> None:
        """Tell every thread to stop."""
        with self.stop_lock:
            self.stop_flag = True

    def emit(self, timestamp: int, ident: int, status: Status | str) -> None:
        """Write one status line, unconditionally."""
        text = status.value if isinstance(status, Status) else status
        with self.print_lock:
            self.out.write(f"{timestamp - self.start_time} {ident} {text}\n")
            self.out.flush()

    def print_status(self, philosopher: Philosopher, status: Status | str) -> None:
        """Write a status line for ``philosopher`` unless the run has stopped."""
        text = status.value if isinstance(status, Status) else status
        with self.print_lock:
            if self.stopped():
                return
            elapsed = current_time_ms() - self.start_time
            self.out.write(f"{elapsed} {philosopher.id} {text}\n")
            self.out.flush()

    def sleep_for(self, duration: int) -> None:
        """Sleep ``duration`` milliseconds, waking early if the run stops."""
        start = current_time_ms()
        while current_time_ms() - start < duration:
            if self.stopped():
                break
            time.sleep(_POLL_INTERVAL)

    def all_eaten_enough(self) -> bool:
        """Stop and return True once every philosopher has had enough meals."""
        required = self.settings.meals_required
        if required is None:
            return False
        with self.eating_lock:
            if any(p.meals_eaten < required for p in self.philosophers):
                return False
        self.stop()
        return True

    def someone_died(self) -> bool:
        """Return True if the run has stopped or any philosopher has starved."""
        if self.stopped():
            return True
        return any(p.has_died() for p in self.philosophers)

    def monitor(self) -> None:
        """Watch the table until everyone is fed or someone dies."""
        while not (self.all_eaten_enough() or self.someone_died()):
            time.sleep(_POLL_INTERVAL)

    def run(self) -> None:
        """Run the whole simulation and wait for every thread to finish."""
        self.start_time = current_time_ms()
        with self.meal_time_lock:
            for philosopher in self.philosophers:
                philosopher.last_meal_time = self.start_time
        threads: list[threading.Thread] = []
        try:
            for philosopher in self.philosophers:
                thread = threading.Thread(
                    target=philosopher.run, name=f"philosopher-{philosopher.id}"
                )
                thread.start()
                threads.append(thread)
            monitor = threading.Thread(target=self.monitor, name="monitor")
            monitor.start()
        except RuntimeError:
            self.stop()
            for thread in threads:
                thread.join()
            raise
        monitor.join()
        for thread in threads:
            thread.join()