"""Customer endpoints, including the travel-history PDF download."""

from __future__ import annotations

import logging

from flask import Blueprint, Response

from travelcrm.api.deps import (
    current_principal,
    customer_service,
    destination_service,
    envelope,
    history_service,
    load_json,
    parse_id,
    parse_list_query,
    require_auth,
    timing,
)
from travelcrm.schemas import (
    CustomerCreateSchema,
    CustomerQuerySchema,
    CustomerSchema,
    CustomerUpdateSchema,
    DestinationQuerySchema,
    DestinationSchema,
)
from travelcrm.services import (
    CustomerCreateIn,
    CustomerListIn,
    CustomerUpdateIn,
    DestinationDraftIn,
    DestinationListIn,
)

log = logging.getLogger(__name__)

bp = Blueprint("customers", __name__)

customer_schema = CustomerSchema()
customer_list_schema = CustomerSchema(many=True)
customer_create_schema = CustomerCreateSchema()
customer_update_schema = CustomerUpdateSchema()
destination_list_schema = DestinationSchema(many=True)


@bp.get("/customers")
@require_auth
@timing
def list_customers():
    """Return filtered, sorted and paginated customers with their destinations."""

    query, filters = parse_list_query(CustomerQuerySchema)
    page = customer_service().list(CustomerListIn(query=query, **filters))
    return envelope(
        "Customers fetched successfully.",
        customer_list_schema.dump(page.items),
        page=page.meta.page,
        limit=page.meta.limit,
        total_pages=page.meta.total_pages,
    )


@bp.get("/customer/<raw_id>")
@require_auth
@timing
def get_customer(raw_id: str):
    """Return one customer aggregate."""

    result = customer_service().get(parse_id(raw_id))
    return envelope("Customer fetched successfully.", customer_schema.dump(result))


@bp.get("/customer/<raw_id>/destinations")
@require_auth
@timing
def list_customer_destinations(raw_id: str):
    """Return one customer's destinations with the listing contract of ``/destinations``."""

    customer_id = parse_id(raw_id)
    query, filters = parse_list_query(DestinationQuerySchema)
    page = destination_service().list_for_customer(
        customer_id, DestinationListIn(query=query, **filters)
    )
    return envelope(
        "Destinations fetched successfully.",
        destination_list_schema.dump(page.items),
        page=page.meta.page,
        limit=page.meta.limit,
        total_pages=page.meta.total_pages,
    )


@bp.post("/customer/create")
@require_auth
@timing
def create_customer():
    """Create a customer together with at least one destination."""

    data = load_json(customer_create_schema)
    dto = CustomerCreateIn(
        name=data["name"],
        email=data["email"],
        destinations=[DestinationDraftIn(**draft) for draft in data["destinations"]],
    )
    result = customer_service().create(dto)
    return envelope("Customer created successfully.", customer_schema.dump(result), status=201)


@bp.patch("/customer/update/<raw_id>")
@require_auth
@timing
def update_customer(raw_id: str):
    """Partially update a customer."""

    customer_id = parse_id(raw_id)
    data = load_json(customer_update_schema)
    result = customer_service().update(customer_id, CustomerUpdateIn(**data))
    return envelope("Customer updated successfully.", customer_schema.dump(result))


@bp.delete("/customer/delete/<raw_id>")
@require_auth
@timing
def delete_customer(raw_id: str):
    """Delete a customer and all of its destinations."""

    customer_id = parse_id(raw_id)
    result = customer_service().delete(customer_id)
    log.info(
        "Customer removed by staff",
        extra={"customer_id": customer_id, "staff_id": current_principal().id},
    )
    return envelope("Customer deleted successfully.", customer_schema.dump(result))


@bp.get("/customer/<raw_id>/download-destinations-history")
@require_auth
@timing
def download_destinations_history(raw_id: str):
    """Stream the customer's travel history as a PDF attachment."""

    export = history_service().export(parse_id(raw_id))
    return Response(
        export.content,
        status=200,
        mimetype=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
