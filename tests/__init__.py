"""
Test suite for bondledger

Contains:
- tests/unit/          : Unit tests for individual modules
- tests/property/      : Property-based tests for ledger and curve invariants
"""
