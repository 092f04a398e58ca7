"""
Test Suite for Book Review API

Test Organization:
- conftest.py: Shared fixtures (fresh app per test, clients, users)
- test_catalog_store.py / test_user_directory.py: the stores
- test_security.py / test_sessions.py: tokens and sessions
- test_books.py / test_register.py / test_customer.py: HTTP endpoints
- test_latency.py / test_config.py: simulated latency and settings

Running Tests:
    pytest
    pytest tests/test_customer.py -v
"""
