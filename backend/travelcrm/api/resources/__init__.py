"""API blueprint package bundling the HTTP routes."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .auth import bp as auth_bp  # noqa: E402
from .customers import bp as customers_bp  # noqa: E402
from .destinations import bp as destinations_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_base)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /health
    (auth_bp, "/auth"),  # -> /auth/login, /auth/register
    (destinations_bp, ""),  # -> /destination/<id>, /destinations, ...
    (customers_bp, ""),  # -> /customer/<id>, /customers, ...
]
