# loyalty/routers/customers/customer_router.py

from fastapi import APIRouter, Depends, Query, Response
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.constants.roles import ALL_ROLES, ADMIN_ONLY
from loyalty.utils.response import APIResponse, success_response
from loyalty.schemas.customers.customer_schemas import (
    CustomerRegister,
    CustomerRegistered,
    CustomerOut,
    CustomerPointsOut,
    CustomerListData,
    CustomerBulkDelete,
    CustomerBulkDeleteResult,
)
from loyalty.services.customers.customer_service import (
    register_customer,
    get_customer,
    get_customer_points,
    get_customer_qr_png,
    list_customers,
    delete_customer,
    bulk_delete_customers,
)
from loyalty.services.customers.loyalty_card_service import generate_loyalty_card_pdf
from loyalty.utils.check_roles import require_role
from loyalty.utils.logger import get_logger

router = APIRouter(prefix="/customers", tags=["Customers"])
logger = get_logger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
}


# =========================
# SELF-SERVICE (PUBLIC)
# =========================
@router.post("/register", response_model=APIResponse[CustomerRegistered])
async def register_customer_api(
    payload: CustomerRegister,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Register customer", extra={"customer_name": payload.name})
    customer = await register_customer(db, payload)
    response.headers.update(NO_CACHE_HEADERS)
    return success_response("Customer registered successfully", customer)


@router.get("/{customer_id}/points", response_model=APIResponse[CustomerPointsOut])
async def get_customer_points_api(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
):
    points = await get_customer_points(db, customer_id)
    return success_response("Customer points fetched successfully", points)


@router.get("/{customer_id}/qr.png")
async def get_customer_qr_api(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
):
    png = await get_customer_qr_png(db, customer_id)
    return Response(content=png, media_type="image/png")


@router.get("/{customer_id}/card.pdf")
async def get_customer_card_api(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
):
    filename, content = await generate_loyalty_card_pdf(db, customer_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =========================
# STAFF / ADMIN
# =========================
@router.get("/", response_model=APIResponse[CustomerListData])
async def list_customers_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),

    search: Optional[str] = Query(None),

    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    logger.info(
        "List customers",
        extra={"search": search, "page": page, "page_size": page_size},
    )

    data = await list_customers(
        db=db,
        search=search,
        page=page,
        page_size=page_size,
    )
    return success_response("Customers fetched successfully", data)


@router.delete("/bulk-delete", response_model=APIResponse[CustomerBulkDeleteResult])
async def bulk_delete_customers_api(
    payload: CustomerBulkDelete,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
):
    logger.info(
        "Bulk delete customers",
        extra={"delete_all": payload.delete_all, "requested": len(payload.customer_ids or [])},
    )
    result = await bulk_delete_customers(db, payload, user)
    return success_response(f"{result.deleted} customers deleted successfully", result)


@router.get("/{customer_id}", response_model=APIResponse[CustomerOut])
async def get_customer_api(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ALL_ROLES)),
):
    customer = await get_customer(db, customer_id)
    return success_response("Customer fetched successfully", customer)


@router.delete("/{customer_id}", response_model=APIResponse[None])
async def delete_customer_api(
    customer_id: str,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Delete customer", extra={"customer_id": customer_id})
    await delete_customer(db, customer_id, user)
    return success_response("Customer deleted successfully")
