import io
import re

import pytest

from diningphilo.clock import now_ms
from diningphilo.config import SimulationConfig
from diningphilo.simulation import Simulation, fork_order

LINE = re.compile(r"^(\d+) (\d+) (.+)$")


def _lines(out):
    return out.getvalue().splitlines()


def _parsed(out):
    result = []
    for line in _lines(out):
        match = LINE.match(line)
        assert match, line
        result.append((int(match.group(1)), int(match.group(2)), match.group(3)))
    return result


@pytest.mark.parametrize("count", [2, 3, 4, 5, 200])
def test_fork_order_uses_both_neighbours(count):
    for pid in range(count):
        first, second = fork_order(pid, count)
        assert {first, second} == {pid, (pid + 1) % count}
        if pid % 2:
            assert first < second
        else:
            assert first > second


def test_take_and_release_forks_locks_neighbours():
    out = io.StringIO()
    sim = Simulation(SimulationConfig(3, 1000, 60, 60), out)
    philosopher = sim.philosophers[1]
    philosopher.take_forks()
    assert sim.forks[1].locked() and sim.forks[2].locked()
    assert not sim.forks[0].locked()
    assert [msg for _, _, msg in _parsed(out)] == ["has taken a fork"] * 2
    philosopher.release_forks()
    assert not any(fork.locked() for fork in sim.forks)


def test_eat_records_meal():
    out = io.StringIO()
    sim = Simulation(SimulationConfig(2, 1000, 60, 60), out)
    philosopher = sim.philosophers[0]
    before = now_ms()
    philosopher.eat()
    assert philosopher.meals_eaten == 1
    assert philosopher.last_meal_time >= before
    assert now_ms() - before >= 60
    assert _parsed(out)[0][1:] == (1, "is eating")


def test_log_silenced_after_death():
    out = io.StringIO()
    sim = Simulation(SimulationConfig(2, 1000, 60, 60), out)
    sim.philosophers[0].think()
    sim.died.set()
    sim.philosophers[1].think()
    assert sim.someone_died()
    assert [entry[1:] for entry in _parsed(out)] == [(1, "is thinking")]


def test_waiter_detects_starvation():
    out = io.StringIO()
    sim = Simulation(SimulationConfig(3, 100, 60, 60), out)
    sim.philosophers[2].last_meal_time -= 1000
    sim.waiter.run()
    assert sim.someone_died()
    assert _parsed(out)[-1][1:] == (3, "died")


def test_waiter_marks_everyone_full():
    out = io.StringIO()
    sim = Simulation(SimulationConfig(3, 1000, 60, 60, must_eat=2), out)
    for philosopher in sim.philosophers:
        philosopher.meals_eaten = 2
    sim.waiter.run()
    assert sim.all_full
    assert all(p.full.is_set() for p in sim.philosophers)
    assert not sim.someone_died()
    assert out.getvalue() == ""


def test_run_until_everyone_has_eaten():
    out = io.StringIO()
    sim = Simulation(SimulationConfig(2, 1000, 60, 60, must_eat=3), out)
    sim.run()
    entries = _parsed(out)
    assert not sim.someone_died()
    assert sim.all_full
    assert all(msg != "died" for _, _, msg in entries)
    for number in (1, 2):
        meals = sum(1 for _, n, msg in entries if n == number and msg == "is eating")
        assert meals >= 3
    stamps = [stamp for stamp, _, _ in entries]
    assert stamps == sorted(stamps)


def test_run_ends_with_single_death():
    out = io.StringIO()
    sim = Simulation(SimulationConfig(4, 310, 200, 100), out)
    sim.run()
    entries = _parsed(out)
    assert sim.someone_died()
    assert [msg for _, _, msg in entries].count("died") == 1
    assert entries[-1][2] == "died"
    assert entries[-1][0] >= 310


def test_single_philosopher_dies():
    out = io.StringIO()
    sim = Simulation(SimulationConfig(1, 100, 60, 60), out)
    sim.run()
    lines = _lines(out)
    assert re.match(r"^\d+: 1 is thinking$", lines[0])
    assert LINE.match(lines[1]).group(3) == "has taken a fork"
    stamp, number, msg = _parsed(io.StringIO("\n".join(lines[1:])))[-1]
    assert (number, msg) == (1, "died")
    assert stamp >= 100
    assert not sim.forks[0].locked()