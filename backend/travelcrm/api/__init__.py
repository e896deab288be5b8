"""API blueprint package aggregating the HTTP resources."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries (``API_BASE_PREFIX``); may be empty.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``.

    Notes
    -----
    When both prefixes are empty the blueprint is mounted at the site root,
    which is how the customer and destination routes are served by default.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.strip("/"), rel_prefix.strip("/")] if segment
        )
        app.register_blueprint(bp, url_prefix=f"/{full_prefix}" if full_prefix else None)


def init_app(app: Flask) -> None:
    """Register the API resources on the Flask app."""

    from travelcrm.api.resources import REGISTRY

    register_blueprint_group(app, base_prefix=app.config.get("API_BASE_PREFIX", ""), entries=REGISTRY)


__all__ = ["init_app", "register_blueprint_group"]
