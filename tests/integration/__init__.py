"""
Integration Tests - End-to-End Flush Cycle Tests.

These tests verify that all components work together correctly.
They use the InMemoryMetricsClient in place of the remote service.

Test Files:
    - test_flush_cycle.py: Accumulate, flush, recover, concurrency
"""
