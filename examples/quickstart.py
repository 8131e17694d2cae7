"""Quickstart example for fuzzbuzz.

Registers two weighted async operations with setup and validate hooks and
runs them from a fresh seed. Re-running with the printed seed executes
exactly the same operation sequence.
"""

import asyncio

from fuzzbuzz import Callback, FuzzBuzz


async def sleep_ms(ms: int) -> None:
    await asyncio.sleep(ms / 1000)


async def setup() -> None:
    print("doing setup")
    await sleep_ms(100)


async def validate() -> None:
    print("validating state")
    await sleep_ms(100)


async def hi() -> None:
    print("hi")
    await sleep_ms(100)


async def ho() -> None:
    print("ho")
    await sleep_ms(100)


def hey(done):
    """Callback style: signal completion through done()."""
    print("hey")
    asyncio.get_running_loop().call_later(0.1, done)


async def main() -> None:
    fuzz = FuzzBuzz(setup=setup, validate=validate)
    print("seed is", fuzz.seed)

    fuzz.add(1, hi)
    fuzz.add(10, ho)
    fuzz.add(2, Callback(hey))

    report = await fuzz.run(20)
    print(f"{report.executed} operations executed, {report.validations} validation(s)")


if __name__ == "__main__":
    asyncio.run(main())
