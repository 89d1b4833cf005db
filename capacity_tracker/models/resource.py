# capacity_tracker/models/resource.py
from sqlmodel import SQLModel, Field, Relationship, Column, Text, JSON
from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, date
from enum import Enum

if TYPE_CHECKING:
    from capacity_tracker.models.project import Project

class ResourceRole(str, Enum):
    DEVELOPER = "Developer"
    QA = "QA"
    BA = "BA"
    DESIGNER = "Designer"
    ARCHITECT = "Architect"
    PROJECT_COORDINATOR = "Project Coordinator"
    OTHER = "Other"  # Requires custom_role_name

class RAGStatus(str, Enum):
    """Traffic-light utilization status"""
    GREEN = "green"  # load < 80%
    AMBER = "amber"  # 80% <= load <= 100%
    RED = "red"  # load > 100%

class Resource(SQLModel, table=True):
    __tablename__ = "resources"
    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_resources_project_name"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(
        sa_column=Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)
    )
    name: str = Field(max_length=100, index=True)
    role: ResourceRole = Field(default=ResourceRole.DEVELOPER, index=True)
    custom_role_name: Optional[str] = Field(default=None, max_length=100)
    skills: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    # Current snapshot (hours per week)
    weekly_availability: float = Field(default=40.0)
    weekly_workload: float = Field(default=0.0)

    # Derived from the snapshot on every write
    load_percentage: float = Field(default=0.0, index=True)
    rag_status: RAGStatus = Field(default=RAGStatus.GREEN)

    notes: Optional[str] = Field(default=None, sa_column=Column(Text))
    is_archived: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    project: "Project" = Relationship(back_populates="resources")
    workloads: List["ResourceWorkload"] = Relationship(
        back_populates="resource",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "ResourceWorkload.week_start_date",
        }
    )

class ResourceWorkload(SQLModel, table=True):
    __tablename__ = "resource_workloads"
    __table_args__ = (
        # One row per resource per week
        UniqueConstraint("resource_id", "week_start_date", name="uq_resource_workloads_resource_week"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    resource_id: int = Field(
        sa_column=Column(Integer, ForeignKey("resources.id", ondelete="CASCADE"), index=True, nullable=False)
    )
    week_start_date: date = Field(index=True)
    week_end_date: date
    availability: float
    workload: float
    load_percentage: float
    rag_status: RAGStatus
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    resource: Resource = Relationship(back_populates="workloads")
