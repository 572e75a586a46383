"""
app/schemas/store.py - Pydantic models for Stores.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class StoreCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Store name")
    address: str = Field("", description="Street address printed on receipts")
    phone: str = Field("", description="Phone number printed on receipts")


class StoreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    phone: Optional[str] = None


class StoreOut(BaseModel):
    id: str
    owner: str
    name: str
    address: str = ""
    phone: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
