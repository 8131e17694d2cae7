"""Tests for diagnostics/formatter.py: DiagnosticFormatter output styles.

Python 3.13+.
"""

import json

from hypothesis import given
from hypothesis import strategies as st

from fuzzbuzz.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    OutputFormat,
)

SEED = "ab" * 32


def _operation_failure() -> Diagnostic:
    return ErrorTemplate.operation_failed(SEED, 41, "faulty", AssertionError("drift"))


class TestOutputFormatEnum:
    """OutputFormat values."""

    def test_values(self):
        """Formats are plain strings for configuration."""
        assert OutputFormat.RUST == "rust"
        assert OutputFormat.SIMPLE == "simple"
        assert OutputFormat.JSON == "json"


class TestFormatRust:
    """Rust compiler-style output."""

    def test_minimal_diagnostic(self):
        """Code and message only."""
        diagnostic = Diagnostic(code=DiagnosticCode.INVALID_COUNT, message="bad count")
        assert DiagnosticFormatter().format(diagnostic) == "error[INVALID_COUNT]: bad count"

    def test_run_context_lines(self):
        """Seed, cycle, operation, and hint each get a line."""
        output = DiagnosticFormatter().format(_operation_failure())
        lines = output.splitlines()

        assert lines[0] == (
            "error[OPERATION_FAILED]: Operation 'faulty' failed at cycle 41: AssertionError: drift"
        )
        assert f"  = seed: {SEED}" in lines
        assert "  = cycle: 41" in lines
        assert "  = operation: faulty" in lines
        assert lines[-1].startswith("  = help: ")

    def test_cycle_zero_is_shown(self):
        diagnostic = ErrorTemplate.validate_failed(SEED, 0, ValueError())
        assert "  = cycle: 0" in DiagnosticFormatter().format(diagnostic)

    def test_warning_severity(self):
        diagnostic = Diagnostic(
            code=DiagnosticCode.INVALID_COUNT, message="m", severity="warning"
        )
        assert DiagnosticFormatter().format(diagnostic).startswith("warning[")

    def test_color(self):
        """Color wraps the severity in ANSI codes."""
        diagnostic = Diagnostic(code=DiagnosticCode.INVALID_COUNT, message="m")
        output = DiagnosticFormatter(color=True).format(diagnostic)
        assert output.startswith("\033[1;31merror\033[0m[INVALID_COUNT]")

    def test_control_characters_escaped(self):
        """A diagnostic never spans more lines than its own fields."""
        diagnostic = Diagnostic(code=DiagnosticCode.CALLBACK_ERROR, message="a\nb\rc\x1bd")
        output = DiagnosticFormatter().format(diagnostic)
        assert output == "error[CALLBACK_ERROR]: a\\nb\\rc\\x1bd"

    def test_format_error_uses_rust_style(self):
        diagnostic = _operation_failure()
        assert diagnostic.format_error() == DiagnosticFormatter().format(diagnostic)
        assert str(diagnostic) == diagnostic.message


class TestFormatSimple:
    """Single-line output."""

    def test_single_line(self):
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format(ErrorTemplate.invalid_bound(0))
        assert output == "INVALID_BOUND: random_int() bound must be a positive int, got 0"

    @given(message=st.text())
    def test_never_multiline(self, message):
        """PROPERTY: simple output has no raw line breaks."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format(Diagnostic(code=DiagnosticCode.INVALID_SEED, message=message))
        assert "\n" not in output
        assert "\r" not in output


class TestFormatJson:
    """JSON output for tooling."""

    def test_fields(self):
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(_operation_failure()))

        assert data["code"] == "OPERATION_FAILED"
        assert data["code_value"] == 2002
        assert data["severity"] == "error"
        assert data["seed"] == SEED
        assert data["cycle"] == 41
        assert data["operation"] == "faulty"
        assert data["cause"] == "AssertionError: drift"
        assert "hint" in data

    def test_optional_fields_omitted(self):
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(Diagnostic(code=DiagnosticCode.INVALID_SEED, message="m")))
        assert set(data) == {"code", "code_value", "message", "severity"}

    @given(message=st.text())
    def test_always_valid_json(self, message):
        """PROPERTY: any message round-trips through json.loads."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(Diagnostic(code=DiagnosticCode.INVALID_SEED, message=message)))
        assert data["message"] == message


class TestSanitize:
    """Length limits."""

    def test_long_message_truncated(self):
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )
        diagnostic = Diagnostic(code=DiagnosticCode.INVALID_SEED, message="x" * 50)
        assert formatter.format(diagnostic) == "INVALID_SEED: " + "x" * 10 + "..."

    def test_short_message_untouched(self):
        formatter = DiagnosticFormatter(sanitize=True, max_content_length=10)
        diagnostic = Diagnostic(code=DiagnosticCode.INVALID_SEED, message="short")
        assert formatter.format(diagnostic) == "error[INVALID_SEED]: short"
