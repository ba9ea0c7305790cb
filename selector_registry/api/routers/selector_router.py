"""
Selector Router.
Handles lookup and manual insertion of selector signatures.
"""

from fastapi import APIRouter, HTTPException, Query, status

from selector_registry.api.dto.selector_dto import (
    RegistryStatsResponseDTO,
    SelectorListResponseDTO,
    SelectorLookupResponseDTO,
    SelectorPushRequestDTO,
)
from selector_registry.api.services.selector_service import (
    selector_service,
    to_entry_dto,
    total_pages,
)
from selector_registry.core.exceptions import (
    SelectorRegistryException,
    create_http_exception,
)
from selector_registry.core.logging import get_logger

logger = get_logger(__name__)

# Create router
router = APIRouter()


@router.get("/stats", response_model=RegistryStatsResponseDTO)
async def get_stats() -> RegistryStatsResponseDTO:
    """Get registry size figures."""
    return RegistryStatsResponseDTO(
        success=True,
        message="Registry statistics",
        data=selector_service.stats(),
    )


@router.get("/", response_model=SelectorListResponseDTO)
async def list_selectors(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(50, ge=1, le=500, description="Items per page"),
) -> SelectorListResponseDTO:
    """
    Get a paginated listing of the registry, in insertion order.

    Args:
        page: Page number (1-indexed, default: 1)
        page_size: Number of items per page (default: 50, max: 500)

    Returns:
        SelectorListResponseDTO with one page of entries
    """
    entries, total_count = selector_service.list_entries(page, page_size)
    return SelectorListResponseDTO(
        success=True,
        message=f"Retrieved {len(entries)} selectors",
        data=entries,
        pagination={
            "page": page,
            "page_size": page_size,
            "total_count": total_count,
            "total_pages": total_pages(total_count, page_size),
        },
    )


@router.get("/{selector}", response_model=SelectorLookupResponseDTO)
async def get_selector(selector: str) -> SelectorLookupResponseDTO:
    """
    Get every signature known for a selector.

    4-byte selectors in particular can collide, so several signatures may be
    returned. Picking one is up to the caller.

    Args:
        selector: 0x-prefixed 4-byte or 32-byte selector

    Returns:
        SelectorLookupResponseDTO with the matching signatures

    Raises:
        HTTPException: 400 for a malformed selector, 404 if it is unknown
    """
    try:
        parsed, signatures = selector_service.lookup(selector)
    except SelectorRegistryException as e:
        raise create_http_exception(e)

    return SelectorLookupResponseDTO(
        success=True,
        message=f"Found {len(signatures)} signatures",
        data=to_entry_dto(parsed, signatures),
    )


@router.post(
    "/",
    response_model=SelectorLookupResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def push_selector(request: SelectorPushRequestDTO) -> SelectorLookupResponseDTO:
    """
    Add a signature for a selector. Kept in memory only.

    Args:
        request: Selector and signature text

    Returns:
        SelectorLookupResponseDTO with every signature now known for the selector
    """
    logger.info(f"Pushing signature {request.signature} for {request.selector}")

    try:
        parsed, signatures = selector_service.push(request.selector, request.signature)
    except SelectorRegistryException as e:
        raise create_http_exception(e)
    except Exception as e:
        logger.error(f"Error pushing selector: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {str(e)}",
        )

    return SelectorLookupResponseDTO(
        success=True,
        message="Signature added",
        data=to_entry_dto(parsed, signatures),
    )
