"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from fastapi import Request

from core.service_factory import Services


def get_services(request: Request) -> Services:
    """Return the service bundle built by ``create_app``."""
    return request.app.state.services
