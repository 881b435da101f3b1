"""
Test suite for orderly-pool

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/scenarios/     : Scenario tests (pool + asset ledgers via transfer_call)
"""
