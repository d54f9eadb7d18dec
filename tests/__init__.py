"""
Test suite for the Task Manager application.

This package contains:
- unit/: validation rules, model serialization, client mirror and HTTP client
- integration/: API, views and client flows against the Flask test client
"""
