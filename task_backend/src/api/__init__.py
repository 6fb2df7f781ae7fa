"""
FastAPI Task Backend package.

The application instance lives in ``src.api.main``; the server entry point in
``src.api.server``.
"""
