"""Threads of the dining philosophers and the waiter that watches them."""

from __future__ import annotations

import sys
import threading
import time
from typing import List, Optional, TextIO, Tuple

from .clock import now_ms, smart_sleep
from .config import SimulationConfig

_WAITER_POLL_S = 0.0005
_ODD_START_DELAY_S = 0.0001
_SINGLE_EXTRA_MS = 100


def fork_order(philosopher_id: int, count: int) -> Tuple[int, int]:
    """Return the fork indices in the order the given philosopher locks them.

    Odd-numbered philosophers take the lower-indexed fork first and
    even-numbered ones the higher-indexed fork first.
    """
    low, high = sorted((philosopher_id, (philosopher_id + 1) % count))
    if philosopher_id % 2 != 0:
        return low, high
    return high, low


class Philosopher:
    """One seat at the table, run in its own thread."""

    def __init__(self, sim: "Simulation", index: int) -> None:
        self.sim = sim
        self.index = index
        self.meal_lock = threading.Lock()
        self.last_meal_time = sim.start_time
        self.meals_eaten = 0
        self.full = threading.Event()

    @property
    def number(self) -> int:
        """The one-based number printed in the log."""
        return self.index + 1

    def run(self) -> None:
        """Eat, sleep and think until someone dies or the waiter says full."""
        if self.sim.config.num_philosophers == 1:
            self._alone()
            return
        if self.index % 2 != 0:
            time.sleep(_ODD_START_DELAY_S)
        while not self.sim.someone_died():
            self.take_forks()
            self.eat()
            self.release_forks()
            if self.full.is_set():
                break
            self.rest()
            self.think()

    def _alone(self) -> None:
        sim = self.sim
        sim._emit_unless_dead(f"{sim.elapsed_ms()}: {self.number} is thinking")
        self._lock_fork(self.index)
        smart_sleep(sim.config.time_to_die + _SINGLE_EXTRA_MS)
        sim.forks[self.index].release()

    def _lock_fork(self, fork: int) -> None:
        self.sim.forks[fork].acquire()
        self.sim.log(self, "has taken a fork")

    def take_forks(self) -> None:
        """Lock both neighbouring forks in this philosopher's order."""
        for fork in fork_order(self.index, self.sim.config.num_philosophers):
            self._lock_fork(fork)

    def eat(self) -> None:
        """Record a meal, then spend the eating time."""
        with self.meal_lock:
            self.sim.log(self, "is eating")
            self.last_meal_time = now_ms()
            self.meals_eaten += 1
        smart_sleep(self.sim.config.time_to_eat)

    def release_forks(self) -> None:
        """Put both forks back on the table."""
        count = self.sim.config.num_philosophers
        self.sim.forks[self.index].release()
        if count != 1:
            self.sim.forks[(self.index + 1) % count].release()

    def rest(self) -> None:
        """Announce sleeping and sleep."""
        self.sim.log(self, "is sleeping")
        smart_sleep(self.sim.config.time_to_sleep)

    def think(self) -> None:
        """Announce thinking."""
        self.sim.log(self, "is thinking")


class Waiter:
    """Watches for starvation and for every philosopher having eaten enough."""

    def __init__(self, sim: "Simulation") -> None:
        self.sim = sim

    def run(self) -> None:
        """Poll the philosophers until one dies or all of them are full."""
        sim = self.sim
        finished = 0
        while True:
            for philosopher in sim.philosophers:
                if self._starved(philosopher):
                    return
                if self._just_filled(philosopher):
                    finished += 1
            if finished == sim.config.num_philosophers:
                sim.all_full = True
                return
            time.sleep(_WAITER_POLL_S)

    def _starved(self, philosopher: Philosopher) -> bool:
        sim = self.sim
        with philosopher.meal_lock:
            hungry_for = now_ms() - philosopher.last_meal_time
        if hungry_for <= sim.config.time_to_die:
            return False
        with sim.print_lock:
            print(f"{sim.elapsed_ms()} {philosopher.number} died",
                  file=sim.output, flush=True)
            sim.died.set()
        return True

    def _just_filled(self, philosopher: Philosopher) -> bool:
        must_eat = self.sim.config.must_eat
        with philosopher.meal_lock:
            if (must_eat is not None
                    and philosopher.meals_eaten == must_eat
                    and not philosopher.full.is_set()):
                philosopher.full.set()
                return True
        return False


class Simulation:
    """A table of philosophers, their forks and a waiter."""

    def __init__(self, config: SimulationConfig,
                 output: Optional[TextIO] = None) -> None:
        self.config = config
        self.output = output if output is not None else sys.stdout
        self.print_lock = threading.Lock()
        self.died = threading.Event()
        self.all_full = False
        self.start_time = now_ms()
        self.forks: List[threading.Lock] = [
            threading.Lock() for _ in range(config.num_philosophers)
        ]
        self.philosophers: List[Philosopher] = [
            Philosopher(self, index) for index in range(config.num_philosophers)
        ]
        self.waiter = Waiter(self)

    def elapsed_ms(self) -> int:
        """Milliseconds since the simulation was set up."""
        return now_ms() - self.start_time

    def someone_died(self) -> bool:
        """Whether the waiter has seen a philosopher starve."""
        return self.died.is_set()

    def _emit_unless_dead(self, line: str) -> None:
        with self.print_lock:
            if not self.someone_died():
                print(line, file=self.output, flush=True)

    def log(self, philosopher: Philosopher, message: str) -> None:
        """Print a timestamped status line unless someone has already died."""
        with self.print_lock:
            if not self.someone_died():
                print(f"{self.elapsed_ms()} {philosopher.number} {message}",
                      file=self.output, flush=True)

    def run(self) -> None:
        """Start every philosopher and the waiter, and wait for them all."""
        threads = [
            threading.Thread(target=philosopher.run,
                             name=f"philosopher-{philosopher.number}")
            for philosopher in self.philosophers
        ]
        threads.append(threading.Thread(target=self.waiter.run, name="waiter"))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()