from typing import Dict, List, Optional

from pydantic import BaseModel, Field


# Request DTOs
class SelectorPushRequestDTO(BaseModel):
    """Request DTO for adding a signature to the registry."""

    selector: str = Field(..., description="0x-prefixed 4-byte or 32-byte selector")
    signature: str = Field(..., description="Signature text, e.g. transfer(address,uint256)")


# Response DTOs
class SignatureDTO(BaseModel):
    """A parsed signature."""

    name: str = Field(..., description="Function or event name")
    inputs: List[str] = Field(..., description="Canonical parameter types")
    signature: str = Field(..., description="Canonical signature text")


class SelectorEntryDTO(BaseModel):
    """A selector with every signature known for it."""

    selector: str = Field(..., description="0x-prefixed selector")
    kind: str = Field(..., description="FOUR or THIRTY_TWO")
    signatures: List[SignatureDTO] = Field(..., description="Known signatures, in insertion order")


class SelectorLookupResponseDTO(BaseModel):
    """Response DTO for a selector lookup or push."""

    success: bool = Field(..., description="Operation success status")
    message: str = Field(..., description="Response message")
    data: Optional[SelectorEntryDTO] = Field(None, description="Selector entry")


class SelectorListResponseDTO(BaseModel):
    """Response DTO for a paginated listing of the registry."""

    success: bool = Field(..., description="Operation success status")
    message: str = Field(..., description="Response message")
    data: List[SelectorEntryDTO] = Field(..., description="Selector entries")
    pagination: Dict[str, int] = Field(
        ...,
        description="Pagination metadata (page, page_size, total_count, total_pages)",
    )


class RegistryStatsDTO(BaseModel):
    """Registry size figures."""

    selectors: int = Field(..., description="Distinct selectors")
    four_byte_selectors: int = Field(..., description="4-byte selectors")
    thirty_two_byte_selectors: int = Field(..., description="32-byte selectors")
    signatures: int = Field(..., description="Total signatures")
    skipped_records: int = Field(..., description="Records dropped at load time")
    source: Optional[str] = Field(None, description="Export file the registry was loaded from")


class RegistryStatsResponseDTO(BaseModel):
    """Response DTO for registry statistics."""

    success: bool = Field(..., description="Operation success status")
    message: str = Field(..., description="Response message")
    data: RegistryStatsDTO = Field(..., description="Registry statistics")
