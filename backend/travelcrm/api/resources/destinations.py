"""Destination endpoints."""

from __future__ import annotations

import logging

from flask import Blueprint

from travelcrm.api.deps import (
    current_principal,
    destination_service,
    envelope,
    load_json,
    parse_id,
    parse_list_query,
    require_auth,
    timing,
)
from travelcrm.schemas import (
    DestinationCreateSchema,
    DestinationQuerySchema,
    DestinationSchema,
    DestinationUpdateSchema,
)
from travelcrm.services import (
    DestinationCreateIn,
    DestinationListIn,
    DestinationUpdateIn,
)

log = logging.getLogger(__name__)

bp = Blueprint("destinations", __name__)

destination_schema = DestinationSchema()
destination_list_schema = DestinationSchema(many=True)
destination_create_schema = DestinationCreateSchema()
destination_update_schema = DestinationUpdateSchema()


@bp.get("/destination/<raw_id>")
@require_auth
@timing
def get_destination(raw_id: str):
    """Return one destination."""

    result = destination_service().get(parse_id(raw_id))
    return envelope("Destination fetched successfully.", destination_schema.dump(result))


@bp.get("/destinations")
@require_auth
@timing
def list_destinations():
    """Return filtered, sorted and paginated destinations."""

    query, filters = parse_list_query(DestinationQuerySchema)
    page = destination_service().list(DestinationListIn(query=query, **filters))
    return envelope(
        "Destinations fetched successfully.",
        destination_list_schema.dump(page.items),
        page=page.meta.page,
        limit=page.meta.limit,
        total_pages=page.meta.total_pages,
    )


@bp.post("/destination/create")
@require_auth
@timing
def create_destination():
    """Attach a new destination to an existing customer."""

    data = load_json(destination_create_schema)
    result = destination_service().create(DestinationCreateIn(**data))
    return envelope(
        "Destination created successfully.", destination_schema.dump(result), status=201
    )


@bp.patch("/destination/update/<raw_id>")
@require_auth
@timing
def update_destination(raw_id: str):
    """Partially update a destination."""

    destination_id = parse_id(raw_id)
    data = load_json(destination_update_schema)
    result = destination_service().update(destination_id, DestinationUpdateIn(**data))
    return envelope("Destination updated successfully.", destination_schema.dump(result))


@bp.delete("/destination/delete/<raw_id>")
@require_auth
@timing
def delete_destination(raw_id: str):
    """Delete a destination unless it is its customer's last one."""

    destination_id = parse_id(raw_id)
    result = destination_service().delete(destination_id)
    log.info(
        "Destination removed by staff",
        extra={"destination_id": destination_id, "staff_id": current_principal().id},
    )
    return envelope("Destination deleted successfully.", destination_schema.dump(result))
