"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with mocked dependencies.

Test Files:
    - test_name_validator.py: Name and source rules
    - test_memory_collector.py: Accumulation and window rotation
    - test_tracker.py: Instrumentation API and flush orchestration
    - test_payload.py: Wire payload shapes
    - test_http_client.py: HTTP client against a mocked session
    - test_config_loader.py: Configuration loading/validation
"""
