# capacity_tracker/schemas/resource.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime, date

from capacity_tracker.models.resource import ResourceRole, RAGStatus

def _unique_skills(skills: Optional[List[str]]) -> Optional[List[str]]:
    """Drop blank and repeated skill tags, keeping first-seen order."""
    if skills is None:
        return None
    seen = []
    for skill in skills:
        tag = skill.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen

# Resource Schemas
class ResourceBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    role: ResourceRole
    custom_role_name: Optional[str] = Field(None, max_length=100)
    skills: List[str] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, v):
        return _unique_skills(v)

class ResourceCreate(ResourceBase):
    project_id: int
    weekly_availability: Optional[float] = Field(None, ge=0, description="Hours per week, defaults to 40")
    weekly_workload: Optional[float] = Field(None, ge=0, description="Hours per week, defaults to 0")

class ResourceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[ResourceRole] = None
    custom_role_name: Optional[str] = Field(None, max_length=100)
    skills: Optional[List[str]] = None
    weekly_availability: Optional[float] = Field(None, ge=0)
    weekly_workload: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
    is_archived: Optional[bool] = None

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, v):
        return _unique_skills(v)

class Resource(ResourceBase):
    id: int
    project_id: int
    weekly_availability: float
    weekly_workload: float
    load_percentage: float
    rag_status: RAGStatus
    is_archived: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ResourceFilter(BaseModel):
    role: Optional[ResourceRole] = None
    name: Optional[str] = None  # case-insensitive substring
    min_load: Optional[float] = None
    max_load: Optional[float] = None
    is_archived: Optional[bool] = None

# Weekly Workload Schemas
class ResourceWorkloadUpsert(BaseModel):
    resource_id: int
    week_start_date: date
    availability: float = Field(..., ge=0)
    workload: float = Field(..., ge=0)
    notes: Optional[str] = None

class WeeklyWorkload(BaseModel):
    week_start_date: date
    week_end_date: date
    availability: float
    workload: float
    load_percentage: float
    rag_status: RAGStatus
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class ResourceWorkload(WeeklyWorkload):
    id: int
    resource_id: int
    created_at: datetime
    updated_at: datetime

class ResourceDetail(Resource):
    workloads: List[WeeklyWorkload] = []

# Aggregate Schemas
class HeatmapRow(BaseModel):
    resource_id: int
    resource_name: str
    role: ResourceRole
    weekly_data: List[WeeklyWorkload]

class RAGDistribution(BaseModel):
    green: int = 0
    amber: int = 0
    red: int = 0

class CapacitySummary(BaseModel):
    total_resources: int
    underutilized: int
    ideal: int
    overloaded: int
    rag_distribution: RAGDistribution
