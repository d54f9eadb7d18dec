"""
Routes package for the Task Manager application.

This package contains route blueprints:
- api: JSON endpoints for the task store
- views: the HTML task page, its form handlers and the liveness probe
"""
