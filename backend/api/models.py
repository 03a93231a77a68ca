"""
Pydantic models for the Grade Rank Calculator API.
Defines request and response schemas with validation.
"""

from pydantic import BaseModel, Field, validator
from typing import List, Dict, Optional, Literal


# ============= REQUEST MODELS =============

class RenameColumnRequest(BaseModel):
    """Request model for renaming a column"""
    name: str = Field(..., description="New display name")

    @validator('name')
    def validate_name(cls, v):
        """Column names end up in a single CSV header line"""
        if '\n' in v or '\r' in v:
            raise ValueError('Column name must be a single line')
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Mathematics"
            }
        }


class ParseRequest(BaseModel):
    """Request model for parsing pasted grade data"""
    raw_text: str = Field(default="", description="Space separated grade data, one student per line")

    class Config:
        json_schema_extra = {
            "example": {
                "raw_text": "A1 90 80\nA2 70 60\nA3 100 100"
            }
        }


class CalculateRequest(BaseModel):
    """Request model for rank calculation"""
    search_id: str = Field(default="", description="Identifier to rank (compared as exact text)")

    class Config:
        json_schema_extra = {
            "example": {
                "search_id": "A1"
            }
        }


# ============= RESPONSE MODELS =============

class ColumnDefinition(BaseModel):
    """Single table column"""
    id: str = Field(..., description="Unique column id")
    name: str = Field(..., description="Display name")
    kind: Literal['identifier', 'grade'] = Field(..., description="Column kind")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "col2",
                "name": "Grade 1",
                "kind": "grade"
            }
        }


class ColumnsResponse(BaseModel):
    """Response model for column endpoints"""
    columns: List[ColumnDefinition] = Field(..., description="Current column schema in order")
    grade_column_count: int = Field(..., description="Number of grade columns")

    class Config:
        json_schema_extra = {
            "example": {
                "columns": [
                    {"id": "col1", "name": "ID", "kind": "identifier"},
                    {"id": "col2", "name": "Grade 1", "kind": "grade"}
                ],
                "grade_column_count": 1
            }
        }


class ParseResponse(BaseModel):
    """Response model for parse endpoint"""
    status: str = Field(default="success", description="Response status")
    records_count: int = Field(..., description="Number of parsed records")
    columns: List[ColumnDefinition] = Field(..., description="Column schema used for parsing")
    records: List[Dict[str, str]] = Field(..., description="Records keyed by column id")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "success",
                "records_count": 2,
                "columns": [
                    {"id": "col1", "name": "ID", "kind": "identifier"},
                    {"id": "col2", "name": "Grade 1", "kind": "grade"}
                ],
                "records": [
                    {"col1": "A1", "col2": "90"},
                    {"col1": "A2", "col2": "70"}
                ]
            }
        }


class CalculateResponse(BaseModel):
    """Response model for rank calculation"""
    found: bool = Field(..., description="Whether the identifier was found")
    search_id: str = Field(..., description="Identifier that was searched")
    rank: Optional[int] = Field(default=None, description="Competition rank (1 = best)")
    percentile: Optional[str] = Field(default=None, description="Top X percent, two decimals")
    total_records: int = Field(..., description="Number of records ranked against")
    summary: str = Field(..., description="Human readable result")

    class Config:
        json_schema_extra = {
            "example": {
                "found": True,
                "search_id": "A1",
                "rank": 2,
                "percentile": "66.67",
                "total_records": 3,
                "summary": "Rank 2 of 3 | Top 66.67%"
            }
        }


class ResetResponse(BaseModel):
    """Response for session reset"""
    status: str = Field(default="success", description="Operation status")
    message: str = Field(..., description="Operation result message")
    columns: List[ColumnDefinition] = Field(..., description="Column schema after reset")

