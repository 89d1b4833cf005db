# capacity_tracker/routers/resources.py
import logging
from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session
from typing import List, Optional
from datetime import date

from capacity_tracker.database.engine import get_db
from capacity_tracker.models.resource import ResourceRole
from capacity_tracker.services.capacity_service import CapacityService
from capacity_tracker.schemas.common import ERROR_RESPONSES
from capacity_tracker.schemas.resource import (
    ResourceCreate, ResourceUpdate, Resource, ResourceDetail, ResourceFilter,
    ResourceWorkloadUpsert, ResourceWorkload, WeeklyWorkload,
    HeatmapRow, CapacitySummary
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/resources",
    tags=["resources"],
    responses=ERROR_RESPONSES,
)

# ========================================
# RESOURCE REGISTER
# ========================================

@router.post("/", response_model=Resource, status_code=status.HTTP_201_CREATED)
def create_resource(
    resource_data: ResourceCreate,
    db: Session = Depends(get_db)
):
    """Create a resource entry; load % and RAG status are derived from its hours."""
    resource = CapacityService.create_resource(db, resource_data)
    return Resource.model_validate(resource)

@router.get("/", response_model=List[Resource])
def get_resources(
    project_id: int,
    include_archived: bool = False,
    db: Session = Depends(get_db)
):
    """Get a project's resource register ordered by name."""
    resources = CapacityService.list_resources(db, project_id, include_archived=include_archived)
    return [Resource.model_validate(r) for r in resources]

@router.get("/filter", response_model=List[Resource])
def filter_resources(
    project_id: int,
    role: Optional[ResourceRole] = None,
    name: Optional[str] = None,
    min_load: Optional[float] = None,
    max_load: Optional[float] = None,
    is_archived: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    """Filter resources by role, name substring, load range and archive state."""
    filters = ResourceFilter(
        role=role,
        name=name,
        min_load=min_load,
        max_load=max_load,
        is_archived=is_archived
    )
    resources = CapacityService.filter_resources(db, project_id, filters)
    return [Resource.model_validate(r) for r in resources]

# ========================================
# REPORTS
# ========================================

@router.get("/heatmap", response_model=List[HeatmapRow])
def get_heatmap(
    project_id: int,
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db)
):
    """Get weekly utilization per active resource for weeks starting in [start_date, end_date]."""
    return CapacityService.get_heatmap(db, project_id, start_date, end_date)

@router.get("/summary", response_model=CapacitySummary)
def get_capacity_summary(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Get utilization band and RAG counts for a project's active resources."""
    return CapacityService.get_capacity_summary(db, project_id)

# ========================================
# WEEKLY WORKLOAD
# ========================================

@router.post("/workload", response_model=ResourceWorkload, status_code=status.HTTP_201_CREATED)
def upsert_weekly_workload(
    workload_data: ResourceWorkloadUpsert,
    db: Session = Depends(get_db)
):
    """Create or update a resource's workload for one week."""
    row = CapacityService.upsert_weekly_workload(db, workload_data)
    return ResourceWorkload.model_validate(row)

# ========================================
# SINGLE RESOURCE
# ========================================

@router.get("/{resource_id}", response_model=ResourceDetail)
def get_resource(
    resource_id: int,
    db: Session = Depends(get_db)
):
    """Get resource details with its weekly workload history."""
    resource = CapacityService.get_resource(db, resource_id)
    return ResourceDetail(
        **Resource.model_validate(resource).model_dump(),
        workloads=[WeeklyWorkload.model_validate(w) for w in resource.workloads]
    )

@router.patch("/{resource_id}", response_model=Resource)
def update_resource(
    resource_id: int,
    resource_data: ResourceUpdate,
    db: Session = Depends(get_db)
):
    """Update resource details, availability or workload."""
    resource = CapacityService.update_resource(db, resource_id, resource_data)
    return Resource.model_validate(resource)

@router.patch("/{resource_id}/archive", response_model=Resource)
def archive_resource(
    resource_id: int,
    db: Session = Depends(get_db)
):
    """Archive a resource; its workload history is kept."""
    resource = CapacityService.archive_resource(db, resource_id)
    return Resource.model_validate(resource)

@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resource(
    resource_id: int,
    db: Session = Depends(get_db)
):
    """Delete a resource and its workload history (administrative cleanup)."""
    CapacityService.delete_resource(db, resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{resource_id}/workload", response_model=List[WeeklyWorkload])
def get_resource_workload(
    resource_id: int,
    db: Session = Depends(get_db)
):
    """Get all weekly workload entries for a resource."""
    rows = CapacityService.get_resource_workload(db, resource_id)
    logger.debug(f"Found {len(rows)} workload entries for resource {resource_id}")
    return [WeeklyWorkload.model_validate(w) for w in rows]
