"""
Test Suite for Metrics Relay.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Accumulate/flush cycle against the in-memory service
    - fixtures/: Shared test fixtures and sample data

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
"""
