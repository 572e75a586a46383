"""
app/schemas/principal.py
Authenticated caller model.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field

Role = Literal["user", "admin"]

class Principal(BaseModel):
    uid: str = Field(..., description="Firebase UID")
    role: Role = Field("user", description="user | admin")
    email: Optional[str] = Field(None, description="E-mail (if any)")
    display_name: Optional[str] = Field(None, description="Display name (if any)")
