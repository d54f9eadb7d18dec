"""
Integration test package for the Task Manager.

Tests use the Flask test client and demonstrate:
- CRUD operation testing
- Input validation testing
- Error handling and resilience testing
- Driving the task client through the real API
"""
