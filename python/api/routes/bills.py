"""
Bill API Routes

Provides list and create endpoints for ledger bills.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...ledger import (
    BillCreateInput,
    BillDTO,
    BillFilters,
    BillStatus,
    BillType,
    LedgerStore,
    Pagination,
    StorageError,
    bill_to_dto,
)
from ...ledger.dto import total_pages
from ...ledger.validation import MAX_ID
from ..auth import User, require_ledger_edit, require_view
from ..database import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ledger/bill", tags=["bills"])

# Keeps the row offset inside a 64-bit integer
MAX_PAGE = 1_000_000


class BillListResponse(BaseModel):
    """Paginated bill list response."""

    bills: list[BillDTO]
    pagination: Pagination


class BillCreateResponse(BaseModel):
    bill: BillDTO


def storage_failure(message: str, error: StorageError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": message, "details": error.message},
    )


@router.get("", response_model=BillListResponse)
async def list_bills(
    khata_id: int | None = Query(None, ge=1, le=MAX_ID, alias="khataId"),
    party_id: int | None = Query(None, ge=1, le=MAX_ID, alias="partyId"),
    bill_type: BillType | None = Query(None, alias="billType"),
    status: BillStatus | None = Query(None),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    store: LedgerStore = Depends(get_store),
    user: User = Depends(require_view),
) -> BillListResponse | JSONResponse:
    """List bills with filters and pagination.

    Args:
        khata_id: Filter by khata
        party_id: Filter by party
        bill_type: Filter by PURCHASE or SALE
        status: Filter by payment status
        start_date: Earliest bill date (inclusive)
        end_date: Latest bill date (inclusive)
        page: Page number
        page_size: Items per page
        store: Ledger data store
        user: Authenticated user

    Returns:
        Paginated list of bills, newest bill date first
    """
    filters = BillFilters(
        khata_id=khata_id,
        party_id=party_id,
        bill_type=bill_type,
        status=status,
        start_date=start_date,
        end_date=end_date,
    )
    offset = (page - 1) * page_size

    try:
        result = store.list_bills(filters, offset=offset, limit=page_size)
    except StorageError as e:
        logger.error(f"Error fetching bills: {e}")
        return storage_failure("Failed to fetch bills", e)

    return BillListResponse(
        bills=[bill_to_dto(bill) for bill in result.bills],
        pagination=Pagination(
            total=result.total,
            page=page,
            page_size=page_size,
            total_pages=total_pages(result.total, page_size),
        ),
    )


@router.post("", status_code=201, response_model=BillCreateResponse)
async def create_bill(
    data: BillCreateInput,
    store: LedgerStore = Depends(get_store),
    user: User = Depends(require_ledger_edit),
) -> BillCreateResponse | JSONResponse:
    """Create a bill numbered after the existing bills of its khata.

    Args:
        data: Bill fields, validated in order: khataId, billType, amount,
            billDate, then the optional partyId, dueDate, description
        store: Ledger data store
        user: Authenticated user

    Returns:
        The created bill
    """
    try:
        bill = store.create_bill(data)
    except StorageError as e:
        logger.error(f"Error creating bill: {e}")
        return storage_failure("Failed to create bill", e)

    logger.info(f"Created bill {bill.bill_number} in khata {bill.khata_id} by {user.user_id}")
    return BillCreateResponse(bill=bill_to_dto(bill))
