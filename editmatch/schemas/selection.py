from pydantic import BaseModel, Field
from uuid import UUID
from typing import Annotated, Literal, Optional

StyleId = Annotated[int, Field(ge=1)]

class StyleSelectionRequest(BaseModel):
    account_type: str
    user_id: UUID
    project_id: Optional[UUID] = None
    styles: list[StyleId] = []

class NicheSelectionRequest(BaseModel):
    account_type: str
    user_id: UUID
    project_id: Optional[UUID] = None
    niche: Optional[str] = None

class SelectionResponse(BaseModel):
    success: bool
    message: str

NicheType = Literal["editor", "videographer"]
