"""
Unit Tests for match3_obs

This package contains unit tests for the board interface and the
observation encoders.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_tensor_encoder.py

    # Run with coverage
    pytest tests/ --cov=match3_obs --cov-report=html

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
