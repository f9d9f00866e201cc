# philosophers

A simulation of the dining philosophers problem. Each philosopher runs in
its own thread. Each one shares a fork, which is a lock, with each
neighbour. A monitor thread watches the table. The simulation stops when a
philosopher starves, or when every philosopher has eaten the required
number of meals.

## Installation

```
pip install .
```

## Usage

```
philo num_philos time_to_die time_to_eat time_to_sleep [meals_required]
```

You can also run it as `python -m philosophers.cli` with the same arguments.

All times are in milliseconds. Each argument must be a positive integer,
not zero and no larger than 2147483647. Leading whitespace and a single
leading `+` are accepted. A minus sign or any other character is rejected.

Example:

```
philo 5 800 200 200 7
```

Each event goes to standard output on its own line:

```
<ms since start> <philosopher id> <action>
```

The action is one of `has taken a fork`, `is eating`, `is sleeping`,
`is thinking` or `died`. Philosophers are numbered from 1.

Here is how the run behaves:

- A philosopher dies once more than `time_to_die` milliseconds pass since
  the start of its last meal, or since the start of the run if it has not
  eaten. The `died` line is printed only once. After that nothing more is
  printed.
- With `meals_required`, the run ends quietly once every philosopher has
  eaten at least that many times. Without it, the run goes on until
  someone dies.
- A lone philosopher has only one fork. It takes that fork, waits
  `time_to_die` milliseconds and dies.

If the number of arguments is wrong, the usage line is printed to standard
error. If an argument is invalid, `Error: Invalid argumets` is printed
instead. Either way the exit status is 1. If a thread cannot be started,
the command prints `Error: Failed to create thread` and exits with status 1.
A completed run exits with status 0.

## Library use

```python
import sys

from philosophers.args import parse_args
from philosophers.simulation import Simulation

settings = parse_args(["4", "410", "200", "200", "3"])
Simulation(settings, sys.stdout).run()
```

The modules provide the following:

- `philosophers.args.parse_positive_int(text)` validates a single value.
- `philosophers.args.parse_args(args)` takes four or five strings and
  returns a frozen `Settings`. In `Settings`, `meals_required` is `None`
  when no limit was given. Both functions raise
  `philosophers.args.ArgumentError`, a `ValueError`, on bad input. Its
  `message` attribute holds the text to show.
- `philosophers.simulation.Simulation(settings, out=None)` writes to `out`,
  or to standard output when `out` is `None`. `run()` blocks until every
  thread has finished.
- `philosophers.simulation.Status` lists the action texts.

## Running the tests

```
pip install .[test]
pytest
```