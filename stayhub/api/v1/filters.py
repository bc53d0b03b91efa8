"""Filters (pricing rules) API router."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from stayhub.api.deps import get_caller_email, get_filter_service
from stayhub.config import settings
from stayhub.models.filter import Filter
from stayhub.schemas.filter import FilterPayload, FilterResponse, FiltersByDateResponse
from stayhub.services.filter_service import FilterService

router = APIRouter(prefix="/api/v1/filters", tags=["filters"])


@router.get(
    "",
    response_model=list[FilterResponse],
    summary="List filters",
    responses={204: {"description": "No filters on this page"}},
)
async def list_filters(
    page: int = Query(0, ge=0, description="Page number, 0 is the first page"),
    page_size: int = Query(
        settings.default_page_size,
        alias="pageSize",
        ge=1,
        le=settings.max_page_size,
        description="Filters per page",
    ),
    service: FilterService = Depends(get_filter_service),
):
    """Return a page of filters in ascending id order."""
    filters = await service.list_page(page, page_size)
    if not filters:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return filters


@router.get(
    "/applicable",
    response_model=FiltersByDateResponse,
    summary="Filters that apply on each night of a stay",
)
async def applicable_filters(
    check_in: date = Query(..., alias="checkIn"),
    check_out: date = Query(..., alias="checkOut"),
    service: FilterService = Depends(get_filter_service),
) -> FiltersByDateResponse:
    """Expand the active filters over every night of ``[checkIn, checkOut)``."""
    if check_in >= check_out:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Check-in date must be before check-out date",
        )
    if check_in < date.today():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Check-in date cannot be in the past",
        )
    return await service.applicable_filters_by_date(check_in, check_out)


@router.get(
    "/{filter_id}",
    response_model=FilterResponse,
    summary="Get a filter",
)
async def get_filter(
    filter_id: int,
    service: FilterService = Depends(get_filter_service),
) -> Filter:
    return await service.get(filter_id)


@router.post(
    "",
    response_model=FilterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a filter",
)
async def create_filter(
    body: FilterPayload,
    response: Response,
    service: FilterService = Depends(get_filter_service),
    _caller_email: str = Depends(get_caller_email),
) -> Filter:
    """Validate and store a new filter. Missing flags default to activated, discount."""
    row = await service.create(body)
    response.headers["Location"] = f"{router.prefix}/{row.id}"
    return row


@router.put(
    "/{filter_id}",
    response_model=FilterResponse,
    summary="Replace a filter",
)
async def update_filter(
    filter_id: int,
    body: FilterPayload,
    service: FilterService = Depends(get_filter_service),
    _caller_email: str = Depends(get_caller_email),
) -> Filter:
    return await service.update(filter_id, body)


@router.delete(
    "/{filter_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a filter",
)
async def delete_filter(
    filter_id: int,
    service: FilterService = Depends(get_filter_service),
    _caller_email: str = Depends(get_caller_email),
) -> Response:
    await service.delete(filter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
