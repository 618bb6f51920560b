"""
Khata API Routes

Provides list and create endpoints for khatas (account books).
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...ledger import (
    KhataCreateInput,
    KhataDTO,
    LedgerStore,
    StorageError,
    default_khata,
    khata_to_dto,
)
from ..auth import User, require_ledger_edit, require_view
from ..database import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ledger/khata", tags=["khatas"])


class KhataListResponse(BaseModel):
    khatas: list[KhataDTO]


class KhataCreateResponse(BaseModel):
    khata: KhataDTO


@router.get("", response_model=KhataListResponse)
async def list_khatas(
    store: LedgerStore = Depends(get_store),
    user: User = Depends(require_view),
) -> KhataListResponse | JSONResponse:
    """List all khatas ordered by name.

    The list is never empty: with no khatas stored, or when the store
    cannot be read, the default "Main Account Book" khata is returned.

    Args:
        store: Ledger data store
        user: Authenticated user

    Returns:
        All khatas
    """
    try:
        khatas = store.list_khatas()
    except StorageError as e:
        logger.error(f"Error fetching khatas: {e}")
        return JSONResponse(
            status_code=200,
            content={
                "khatas": [khata_to_dto(default_khata()).model_dump(by_alias=True)],
                "error": "Failed to fetch khatas, using default",
            },
        )

    if not khatas:
        khatas = [default_khata()]

    return KhataListResponse(khatas=[khata_to_dto(khata) for khata in khatas])


@router.post("", status_code=201, response_model=KhataCreateResponse)
async def create_khata(
    data: KhataCreateInput,
    store: LedgerStore = Depends(get_store),
    user: User = Depends(require_ledger_edit),
) -> KhataCreateResponse | JSONResponse:
    """Create a khata.

    Args:
        data: Khata name and optional description
        store: Ledger data store
        user: Authenticated user

    Returns:
        The created khata
    """
    try:
        khata = store.create_khata(data)
    except StorageError as e:
        logger.error(f"Error creating khata: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to create khata", "details": e.message},
        )

    logger.info(f"Created khata {khata.id} ({khata.name!r}) by {user.user_id}")
    return KhataCreateResponse(khata=khata_to_dto(khata))
