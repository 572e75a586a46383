# app/schemas/category.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

# ---------- input ----------
class CategoryCreate(BaseModel):
    """New category for a store's catalog."""
    name: str = Field(..., min_length=1, description="Category name")
    description: str = Field("", description="Description (optional)")

class CategoryUpdate(BaseModel):
    """Optional fields for a category update."""
    name: Optional[str] = Field(None, min_length=1, description="New category name")
    description: Optional[str] = Field(None, description="New description")

# ---------- output ----------
class CategoryOut(BaseModel):
    """List/detail output."""
    id: str
    store: str
    name: str
    description: str = ""
    created_at: Optional[datetime] = None
