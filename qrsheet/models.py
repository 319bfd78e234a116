from typing import List, Optional
from pydantic import BaseModel, Field

class GenerateRequest(BaseModel):
    links: str = Field(..., description="Newline-separated URLs or referral paths.")

class RecordResponse(BaseModel):
    id: int
    url: str
    display_url: str
    is_valid: bool
    has_warning: bool
    warning_message: Optional[str] = None

class SummaryResponse(BaseModel):
    total: int
    invalid: int
    warnings: int
    pages: int
    truncated: bool = False

class GenerateResponse(BaseModel):
    records: List[RecordResponse]
    summary: SummaryResponse

class CollateResponse(BaseModel):
    total: int
    rows: int
    cols: int
    pages: int
    layout: List[List[List[Optional[int]]]]
