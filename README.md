# coopkernel

A small simulated kernel built around cooperative threads, for studying how
a uniprocessor kernel schedules threads and how synchronization primitives
are built on top of that scheduling.

Each kernel thread runs on its own host thread, but only the kernel's
current thread ever executes; the rest wait until the scheduler switches to
them. Control changes hands only where a thread yields, sleeps or finishes.

## Modules

- `coopkernel.thread` — `Kernel`, which owns the scheduler and makes the
  creating host thread its `main` thread; `Thread`, with `fork(func, arg)`,
  `yield_cpu()`, `sleep()` and `finish()`; the `ThreadStatus` enumeration
  (`JUST_CREATED`, `RUNNING`, `READY`, `BLOCKED`); and `KernelHalted`, raised
  once the kernel halts. A `Kernel` can be used as a context manager and is
  closed with `shutdown()`. If a thread sleeps while no other thread is
  ready, the kernel halts.
- `coopkernel.scheduler` — `Scheduler`, a first-in, first-out ready list
  (`ready_to_run`, `find_next_to_run`, `run`, `format`).
- `coopkernel.synch` — `Semaphore` (`p` / `v`), `Lock` (`acquire` /
  `release` / `is_held_by_current_thread`, also usable in a `with`
  statement) and `Condition` (`wait` / `signal` / `broadcast`) with
  Mesa-style semantics. Misusing a lock or condition raises `RuntimeError`.
- `coopkernel.synchlist` — `SynchList`, a lock-guarded list whose `remove`
  waits until an item is appended; also `append` and `mapcar`.
- `coopkernel.keyedlist` — `KeyedList`, a queue that can also be kept
  ordered by an integer key (`append`, `prepend`, `remove`,
  `sorted_insert`, `sorted_remove`, `is_empty`, `mapcar`).
- `coopkernel.bitmap` — `BitMap`, a fixed-size set of bits with `mark`,
  `clear`, `test`, `find`, `num_clear`, and `to_bytes` / `from_bytes` /
  `fetch_from` / `write_back` for saving to and loading from binary files.
- `coopkernel.utility` — `Debug`, flag-controlled debug output (`"+"`
  enables every flag), and `div_round_up` / `div_round_down`.
- `coopkernel.threadtest` — `simple_thread` and `thread_test`, a ping-pong
  in which two threads each loop five times, yielding to each other.
- `coopkernel.system` — `Options`, `parse_args`, `initialize` and `main`.

## Installing

```
pip install .
```

## Running

The `coopkernel` command boots the kernel, runs the ping-pong thread test,
and shuts down:

```
coopkernel
```

Options:

- `-d <flags>` enables debug messages for the given flag characters; `-d`
  on its own enables all of them. `t` selects thread-system messages:

  ```
  coopkernel -d t
  ```

- `-rs <seed>` is accepted and recorded in `Options.random_yield` and
  `Options.random_seed`; it is an error without a seed.

Other arguments are ignored.

## Using it from Python

```python
from coopkernel.system import initialize
from coopkernel.threadtest import thread_test

options, kernel = initialize(["-d", "t"])
thread_test(kernel)
kernel.shutdown()
```

`parse_args` turns a command line into an `Options` value without
starting anything.

## What it does not do

There is no timer device, so `-rs` does not cause random yields: threads
switch only when they yield, sleep or finish. There are no interrupts or
other devices, no user programs or address spaces, no file system and no
network; the command runs only the thread test.

## Tests

```
pip install .[test]
pytest
```