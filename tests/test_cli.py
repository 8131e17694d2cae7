"""Tests for cli.py: the ``python -m fuzzbuzz`` runner.

Covers:
- Target loading and its error codes
- Fresh-seed rounds, fixed-seed reproduction, bisect on failure
- Text and JSON output, exit codes, FUZZBUZZ_SEED

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import json

import pytest

from fuzzbuzz import ConfigurationError, DeterministicRandom, ValidateFailure
from fuzzbuzz.cli import FuzzResult, load_target, main, output_result, run_target
from fuzzbuzz.constants import ENV_SEED
from fuzzbuzz.diagnostics import DiagnosticCode, FailurePhase
from tests.helpers import targets

FAILING = "tests.helpers.targets:failing"
PASSING = "tests.helpers.targets:passing"
SEED = DeterministicRandom(b"cli").seed


class TestLoadTarget:
    """module:attribute resolution."""

    def test_loads_factory(self) -> None:
        assert load_target(FAILING) is targets.failing

    @pytest.mark.parametrize(
        ("target", "code"),
        [
            ("tests.helpers.targets", DiagnosticCode.TARGET_INVALID),
            (":failing", DiagnosticCode.TARGET_INVALID),
            ("tests.helpers.targets:", DiagnosticCode.TARGET_INVALID),
            ("tests.helpers.no_such_module:failing", DiagnosticCode.TARGET_NOT_FOUND),
            ("tests.helpers.targets:missing", DiagnosticCode.TARGET_NOT_FOUND),
            ("tests.helpers.targets:NOT_CALLABLE", DiagnosticCode.TARGET_NOT_HARNESS),
            ("tests.helpers.broken_target:make_harness", DiagnosticCode.TARGET_NOT_FOUND),
        ],
    )
    def test_errors(self, target: str, code: DiagnosticCode) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_target(target)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is code


class TestRunTarget:
    """Session logic without argument parsing."""

    def test_passing_rounds(self) -> None:
        result = asyncio.run(run_target(targets.passing, PASSING, operations=50, rounds=3))
        assert result.passed
        assert result.rounds == 3
        assert result.exit_code == 0
        assert result.failure is None

    def test_failure_stops_rounds(self) -> None:
        result = asyncio.run(run_target(targets.failing, FAILING, operations=20, rounds=5))
        assert not result.passed
        assert result.rounds == 1
        assert result.exit_code == 1
        assert result.phase is FailurePhase.VALIDATE
        assert result.cycle == 19
        assert isinstance(result.failure, ValidateFailure)
        assert result.minimal_operations is None

    def test_bisect_on_failure(self) -> None:
        result = asyncio.run(
            run_target(targets.failing, FAILING, operations=20, bisect=True)
        )
        assert result.minimal_operations == targets.FAILURE_THRESHOLD + 1

    def test_fixed_seed_is_single_round(self) -> None:
        result = asyncio.run(
            run_target(targets.passing, PASSING, operations=10, seed=SEED, rounds=10)
        )
        assert result.rounds == 1
        assert result.seed == SEED

    def test_failure_seed_reproduces(self) -> None:
        result = asyncio.run(run_target(targets.failing, FAILING, operations=20))
        assert result.seed is not None
        replay = asyncio.run(run_target(targets.failing, FAILING, operations=20, seed=result.seed))
        assert replay.seed == result.seed
        assert replay.cycle == result.cycle

    def test_factory_must_return_harness(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            asyncio.run(
                run_target(targets.not_a_harness, "tests.helpers.targets:not_a_harness", operations=1)
            )
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.TARGET_NOT_HARNESS

    @pytest.mark.parametrize("factory", [targets.without_seed, targets.broken])
    def test_factory_exception_is_a_target_error(self, factory) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            asyncio.run(run_target(factory, "tests.helpers.targets:factory", operations=1))
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.TARGET_FACTORY_FAILED
        assert exc_info.value.__cause__ is not None

    def test_error_exit_code(self) -> None:
        assert FuzzResult(target="t", operations=1, error="bad").exit_code == 2


class TestMain:
    """Argument parsing, output, and exit codes."""

    def test_pass_text_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([PASSING, "-n", "30", "--seed", SEED]) == 0
        out = capsys.readouterr().out
        assert out.startswith("[PASS]")
        assert SEED in out

    def test_failure_text_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([FAILING, "-n", "20", "--bisect"]) == 1
        out = capsys.readouterr().out
        assert out.startswith("[FAIL]")
        assert "error[VALIDATE_FAILED]" in out
        assert "Reproduce with:" in out
        assert f"Minimal failing run: {targets.FAILURE_THRESHOLD + 1} operations" in out

    def test_failure_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([FAILING, "-n", "20", "--seed", SEED, "--bisect", "--json"]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "fail"
        assert data["seed"] == SEED
        assert data["phase"] == "validate"
        assert data["cycle"] == 19
        assert data["minimal_operations"] == targets.FAILURE_THRESHOLD + 1
        assert data["diagnostic"]["code"] == "VALIDATE_FAILED"
        assert data["diagnostic"]["seed"] == SEED

    def test_validate_all_fails_at_breaking_operation(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([FAILING, "-n", "20", "--validate-all", "--json"]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["cycle"] == targets.FAILURE_THRESHOLD

    def test_seed_from_environment(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_SEED, SEED)
        assert main([PASSING, "-n", "5", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["seed"] == SEED
        assert data["rounds"] == 1

    def test_bad_target_is_an_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["tests.helpers.targets:missing", "--json"]) == 2
        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "error"
        assert "TARGET_NOT_FOUND" in data["error"]

    def test_bad_seed_is_an_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([PASSING, "--seed", "not-hex"]) == 2
        assert capsys.readouterr().out.startswith("[ERROR]")

    def test_negative_operations_rejected(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([PASSING, "-n", "-1"])
        assert exc_info.value.code == 2

    def test_counter_example(self, capsys: pytest.CaptureFixture[str]) -> None:
        target = "examples.counter_bisect:make_harness"
        assert main([target, "-n", "20000", "--seed", SEED, "--bisect", "--json"]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["phase"] == "validate"
        assert 1 <= data["minimal_operations"] <= 20000

    @pytest.mark.parametrize(
        "target",
        [
            "tests.helpers.targets:without_seed",
            "tests.helpers.targets:broken",
            "tests.helpers.targets:FAILURE_THRESHOLD.__class__",
            "tests.helpers.broken_target:make_harness",
        ],
    )
    def test_target_errors_exit_with_two(
        self, target: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([target, "-n", "1", "--json"]) == 2
        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "error"
        assert "TARGET_" in data["error"]

    def test_text_output_colors_on_request(self, capsys: pytest.CaptureFixture[str]) -> None:
        result = asyncio.run(run_target(targets.failing, FAILING, operations=20, seed=SEED))
        output_result(result, use_json=False, color=True)
        assert "\033[1;31merror\033[0m[VALIDATE_FAILED]" in capsys.readouterr().out

    def test_text_output_plain_when_not_a_terminal(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        result = asyncio.run(run_target(targets.failing, FAILING, operations=20, seed=SEED))
        output_result(result, use_json=False)
        assert "\033[" not in capsys.readouterr().out
