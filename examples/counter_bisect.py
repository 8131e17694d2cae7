"""Finding and minimizing a failure with fuzzbuzz.

A counter is updated by add/sub/mul operations that keep ``n`` and
``expected`` in step, plus one rarely selected faulty operation that
makes them drift. The run fails at validation; bisect() then replays the
seed to find how many operations are needed to reproduce the drift.

Run directly:
    python examples/counter_bisect.py

Or through the command-line runner:
    python -m fuzzbuzz examples.counter_bisect:make_harness -n 20000 --bisect
"""

import asyncio

from fuzzbuzz import FuzzBuzz, HarnessFailure

RUN_LENGTH = 20000


class CounterDrift(AssertionError):
    """Counter no longer matches its expected value."""


def make_harness(seed=None):
    """Build the counter harness. ``fuzz.faults`` counts faulty executions."""
    fuzz = FuzzBuzz(seed=seed)
    fuzz.faults = 0

    def setup():
        fuzz.n = 0
        fuzz.expected = 0

    def validate():
        if fuzz.n != fuzz.expected:
            raise CounterDrift(f"n={fuzz.n} expected={fuzz.expected}")

    def add():
        r = fuzz.random_int(10)
        fuzz.n += r
        fuzz.expected += r

    def sub():
        r = fuzz.random_int(10)
        fuzz.n -= r
        fuzz.expected -= r

    def mul():
        r = fuzz.random() + 0.5
        fuzz.n *= r
        fuzz.expected *= r

    def faulty():
        r = fuzz.random_int(10)
        fuzz.n += r + 1  # drifts by one
        fuzz.expected += r
        fuzz.faults += 1

    fuzz.setup(setup)
    fuzz.validate(validate)
    for weight, op in ((10, add), (10, sub), (10, mul), (1, faulty)):
        fuzz.add(weight, op)
    return fuzz


async def main() -> None:
    fuzz = make_harness()
    print("seed is", fuzz.seed)

    try:
        await fuzz.run(RUN_LENGTH)
    except HarnessFailure as failure:
        print(f"run failed after {fuzz.faults} faulty operation(s):")
        print(failure)
    else:
        print("run passed; try another seed")
        return

    n = await fuzz.bisect(RUN_LENGTH)
    print(f"bisect says {n} operations reproduce the failure")

    fuzz.faults = 0
    try:
        await fuzz.run(n)
    except HarnessFailure:
        print(f"still fails, with {fuzz.faults} faulty operation(s)")


if __name__ == "__main__":
    asyncio.run(main())
