"""Integration tests for complete workflows.

Coverage:
    - Upload then ask, through controller, session store, and HTTP clients
    - Persistence across store reloads
    - FastAPI application endpoints
"""
