"""
Regulations Service Test Suite
==============================

Test organization:
- tests/unit/                   - Configuration and logging
- tests/services/regulations/   - Service logic and HTTP routes (upstreams mocked)

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
"""
