# diningphilo

A simulation of the dining philosophers problem. Each philosopher runs in
its own thread at a round table, with one fork (a lock) between each pair of
neighbours. A philosopher takes both neighbouring forks, eats, puts the forks
back, sleeps, then thinks, and repeats. A separate waiter thread polls every
philosopher: if one goes longer than the allowed time since the start of
their last meal, the waiter prints the death and the others stop printing and
stop eating. If a meal count is given, the simulation ends once every
philosopher has eaten exactly that many meals.

## Installation

```
pip install .
```

## Usage

```
diningphilo NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS]
```

All times are in milliseconds.

- `NUMBER_OF_PHILOSOPHERS`: between 1 and 200.
- `TIME_TO_DIE`: how long a philosopher may go without starting a meal (at least 60).
- `TIME_TO_EAT`: how long a meal takes (at least 60).
- `TIME_TO_SLEEP`: how long a philosopher sleeps after eating (at least 60).
- `MEALS` (optional): once every philosopher has eaten this many meals, the
  simulation stops. Must be positive.

No value may exceed 2147483647. Arguments must be plain integers, optionally
with leading whitespace and a single sign; anything after the digits makes the
argument invalid, and a sign with no digits reads as 0.

If the number of arguments is not four or five, the command prints
`Wrong amount of arguments!` and exits with status 1. If an argument is
invalid, it prints `Failure while initializing` and exits with status 1.
Otherwise it runs the simulation to the end and exits with status 0.

### Output

Each event is printed on its own line as the milliseconds since the start,
the philosopher's number (counting from 1) and what happened:

```
0 1 has taken a fork
0 1 has taken a fork
0 1 is eating
200 1 is sleeping
400 1 is thinking
...
410 3 died
```

With a single philosopher there is only one fork: the philosopher prints
`0: 1 is thinking`, takes the fork, and waits until the waiter reports the
death.

Examples:

```
diningphilo 5 800 200 200
diningphilo 5 800 200 200 7
diningphilo 4 310 200 100
diningphilo 1 800 200 200
```

## Library use

```python
import sys

from diningphilo.config import ConfigError, parse_config
from diningphilo.simulation import Simulation

try:
    config = parse_config(["5", "800", "200", "200", "3"])
except ConfigError as exc:
    print(exc)
else:
    Simulation(config, sys.stdout).run()
```

- `diningphilo.config.parse_config(args)` takes four or five argument strings
  and returns a frozen `SimulationConfig`, or raises `ConfigError` (a
  `ValueError`).
- `diningphilo.config.parse_number(text)` reads one argument the same way.
- `diningphilo.simulation.Simulation(config, output)` writes its lines to
  `output` (standard output when `None`); `run()` starts all threads and
  waits for them.
- `diningphilo.simulation.fork_order(philosopher_id, count)` gives the two
  fork indices a philosopher picks up, in the order it picks them up.
- `diningphilo.clock.now_ms()` and `smart_sleep(duration_ms)` are the
  millisecond clock and the sleep the simulation uses.

## Running the tests

```
pip install ".[test]"
pytest
```