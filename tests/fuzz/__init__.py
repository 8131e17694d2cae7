"""Fuzz testing infrastructure for fuzzbuzz.

This package contains:
- test_registry_state_machine: RuleBasedStateMachine over OperationRegistry
  against a list model, plus replay/bisect agreement on random registries

Python 3.13+.
"""
