"""
HTTP API for the account opening workflow.

This package provides a FastAPI application that exposes:
- The account opening workflow (POST /accounts)
- Read access to stored accounts and published events
"""

from api.main import app

__all__ = ["app"]
