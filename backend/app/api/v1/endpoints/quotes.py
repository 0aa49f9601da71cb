"""
Quote API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api.v1.middleware import require_authentication
from app.db.session import get_db
from app.controllers.quote_controller import QuoteController
from app.models.quote import QuoteStatus
from app.models.user import User
from app.schemas.invoice import InvoiceDetailResponse
from app.schemas.quote import (
    QuoteCreate,
    QuoteUpdate,
    QuoteDetailResponse,
    QuoteListResponse,
)

router = APIRouter()


@router.post("", response_model=QuoteDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_quote(
    quote_data: QuoteCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
) -> QuoteDetailResponse:
    """Create a draft quote with its items."""
    controller = QuoteController(db)
    return await controller.create_quote(quote_data, current_user)


@router.get("", response_model=QuoteListResponse)
async def list_quotes(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    status: Optional[QuoteStatus] = Query(None),
    client_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> QuoteListResponse:
    """List quotes with optional filters."""
    controller = QuoteController(db)
    return await controller.list_quotes(
        skip=skip,
        limit=limit,
        status=status,
        client_id=client_id,
    )


@router.get("/{quote_id}", response_model=QuoteDetailResponse)
async def get_quote(
    quote_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> QuoteDetailResponse:
    """Get quote with client and items."""
    controller = QuoteController(db)
    quote = await controller.get_quote_detail(quote_id)
    if not quote:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Quote not found",
        )
    return quote


@router.patch("/{quote_id}", response_model=QuoteDetailResponse)
async def update_quote(
    quote_id: UUID,
    quote_data: QuoteUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
) -> QuoteDetailResponse:
    """Update a quote; a status change must follow the quote lifecycle."""
    controller = QuoteController(db)
    return await controller.update_quote(quote_id, quote_data, current_user)


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quote(
    quote_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
):
    """Delete a quote that has not been invoiced."""
    controller = QuoteController(db)
    deleted = await controller.delete_quote(quote_id, current_user)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Quote not found",
        )


@router.post(
    "/{quote_id}/convert-to-invoice",
    response_model=InvoiceDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
async def convert_to_invoice(
    quote_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_authentication),
) -> InvoiceDetailResponse:
    """Convert a quote to its invoice. 409 when it already has one."""
    controller = QuoteController(db)
    return await controller.convert_to_invoice(quote_id, current_user)


@router.get("/{quote_id}/pdf")
async def export_quote_pdf(
    quote_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Download the quote as a PDF."""
    controller = QuoteController(db)
    filename, output = await controller.export_pdf(quote_id)
    return StreamingResponse(
        output,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
