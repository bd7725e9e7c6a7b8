"""
Pydantic models for API request/response schemas.
"""
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field
from datetime import datetime


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    pdftk_available: bool = False


class CheckboxValues(BaseModel):
    """Values that select and clear a checkbox or radio field."""
    toCheck: List[str]
    toUncheck: str = "Off"


class CleanField(BaseModel):
    """Clean JSON projection of one labeled field."""
    type: Optional[str] = None
    name: str
    label: Optional[str] = Field(None, description="Inferred caption, absent when none was found")
    labelConfidence: str = Field(..., description="Confidence as a percentage string, e.g. '67%'")
    flags: str = "1"
    justification: str = "Left"
    maxLength: Optional[int] = None
    value: Optional[str] = None
    options: Optional[List[str]] = None
    checkboxValues: Optional[CheckboxValues] = None


class FieldStatistics(BaseModel):
    """Aggregate field counts for a document."""
    total_fields: int
    by_type: Dict[str, int]
    by_part: Dict[str, int]


class ExtractResponse(BaseModel):
    """Response model for a field extraction request."""
    success: bool
    filename: str
    total_fields: int
    file_size_kb: int
    has_fields: bool
    pages: int = 0
    statistics: FieldStatistics
    fields: Dict[str, Any] = Field(default_factory=dict, description="Fields grouped byPart, byType and all")
    raw_fields: List[Dict[str, Any]] = Field(default_factory=list)
    enhanced_fields: List[Dict[str, Any]] = Field(default_factory=list)
    clean_fields: List[CleanField] = Field(default_factory=list)
    text_output: str = ""
    text_extraction_error: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error response for a failed extraction."""
    error: str
