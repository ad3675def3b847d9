from pydantic import BaseModel
from uuid import UUID
from datetime import datetime
from typing import Optional

class MatchResultItem(BaseModel):
    candidate_id: UUID
    final_score: float
    style_score: int
    niche_match_score: int

    model_config = {"from_attributes": True}

class RecommendedProjectItem(BaseModel):
    project_id: UUID
    owner_id: UUID
    title: str
    category: str
    status: int
    created_at: Optional[datetime] = None
    match_score: int
    is_recommended: bool
    matched_category: Optional[str] = None

class RecommendedProjectsMeta(BaseModel):
    total_projects: int
    recommended_count: int
    freelancer_superpowers: list[str]
    user_role: str

class RecommendedProjectsResponse(BaseModel):
    data: list[RecommendedProjectItem]
    meta: RecommendedProjectsMeta
