"""
Capacity Service - resource lifecycle rules, weekly workload and utilization reports.

Reads (heatmap, summary) are not isolated from concurrent writes; a heatmap
taken while upserts are in flight may mix old and new weeks.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import List, Dict
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from capacity_tracker.core.errors import NotFoundError, ConflictError
from capacity_tracker.crud.project import project_crud
from capacity_tracker.crud.resource import resource_crud, resource_workload_crud
from capacity_tracker.models.resource import Resource, ResourceWorkload, ResourceRole, RAGStatus
from capacity_tracker.schemas.resource import (
    ResourceCreate,
    ResourceUpdate,
    ResourceFilter,
    ResourceWorkloadUpsert,
    WeeklyWorkload,
    HeatmapRow,
    RAGDistribution,
    CapacitySummary,
)
from capacity_tracker.services.utilization import (
    classify_utilization,
    rag_status_for,
    week_window,
    DEFAULT_WEEKLY_AVAILABILITY,
    DEFAULT_WEEKLY_WORKLOAD,
)

logger = logging.getLogger(__name__)

CUSTOM_ROLE_REQUIRED = 'Custom role name is required when role is "Other"'


class CapacityService:
    """Service for resource capacity tracking."""

    # ========================================
    # RESOURCE LIFECYCLE
    # ========================================

    @staticmethod
    def get_resource(db: Session, resource_id: int) -> Resource:
        resource = resource_crud.get_resource(db, resource_id)
        if not resource:
            raise NotFoundError("Resource", resource_id)
        return resource

    @staticmethod
    def create_resource(db: Session, resource_data: ResourceCreate) -> Resource:
        """
        Create a resource with its derived load percentage and RAG status.

        Availability and workload default to 40h and 0h. Names are unique per
        project regardless of archive state.
        """
        project = project_crud.get_project(db, resource_data.project_id)
        if not project:
            raise NotFoundError("Project", resource_data.project_id)

        if resource_crud.get_by_name(db, project.id, resource_data.name):
            raise ConflictError(f'Resource with name "{resource_data.name}" already exists in this project')

        if resource_data.role == ResourceRole.OTHER and not resource_data.custom_role_name:
            raise ConflictError(CUSTOM_ROLE_REQUIRED)

        availability = resource_data.weekly_availability
        if availability is None:
            availability = DEFAULT_WEEKLY_AVAILABILITY
        workload = resource_data.weekly_workload
        if workload is None:
            workload = DEFAULT_WEEKLY_WORKLOAD

        utilization = classify_utilization(availability, workload)

        resource = Resource(
            project_id=project.id,
            name=resource_data.name,
            role=resource_data.role,
            custom_role_name=resource_data.custom_role_name if resource_data.role == ResourceRole.OTHER else None,
            skills=resource_data.skills or [],
            weekly_availability=availability,
            weekly_workload=workload,
            load_percentage=utilization.load_percentage,
            rag_status=utilization.rag_status,
            notes=resource_data.notes,
            is_archived=False,
        )

        try:
            resource = resource_crud.save(db, resource)
        except IntegrityError:
            # Lost a race with a concurrent create of the same name
            raise ConflictError(f'Resource with name "{resource_data.name}" already exists in this project')

        logger.info(
            f"Created resource {resource.id} '{resource.name}' in project {project.id} "
            f"({resource.load_percentage}% {resource.rag_status.value})"
        )
        return resource

    @staticmethod
    def update_resource(db: Session, resource_id: int, resource_data: ResourceUpdate) -> Resource:
        """
        Apply a partial update.

        When either availability or workload is supplied both are resolved and
        reclassified, and the derived fields are written in the same commit.
        """
        resource = CapacityService.get_resource(db, resource_id)
        update_data = resource_data.model_dump(exclude_unset=True)

        # Check every rule before touching the instance
        name = update_data.get("name")
        renamed = name is not None and name != resource.name
        if renamed and resource_crud.get_by_name(db, resource.project_id, name):
            raise ConflictError(f'Resource with name "{name}" already exists in this project')

        role = update_data.get("role")
        custom_role_name = update_data.get("custom_role_name")
        if role == ResourceRole.OTHER and resource.role == ResourceRole.OTHER and "custom_role_name" not in update_data:
            # Role unchanged, stored label stays
            custom_role_name = resource.custom_role_name
        if role == ResourceRole.OTHER and not custom_role_name:
            raise ConflictError(CUSTOM_ROLE_REQUIRED)
        if (role is None and "custom_role_name" in update_data
                and resource.role == ResourceRole.OTHER and not custom_role_name):
            raise ConflictError(CUSTOM_ROLE_REQUIRED)

        if renamed:
            resource.name = name
        if role is not None:
            resource.role = role
            resource.custom_role_name = custom_role_name if role == ResourceRole.OTHER else None
        elif custom_role_name and resource.role == ResourceRole.OTHER:
            resource.custom_role_name = custom_role_name

        if update_data.get("skills") is not None:
            resource.skills = update_data["skills"]
        if "notes" in update_data:
            resource.notes = update_data["notes"]
        if update_data.get("is_archived") is not None:
            resource.is_archived = update_data["is_archived"]

        new_availability = update_data.get("weekly_availability")
        new_workload = update_data.get("weekly_workload")
        if new_availability is not None or new_workload is not None:
            availability = new_availability if new_availability is not None else resource.weekly_availability
            workload = new_workload if new_workload is not None else resource.weekly_workload
            utilization = classify_utilization(availability, workload)

            resource.weekly_availability = availability
            resource.weekly_workload = workload
            resource.load_percentage = utilization.load_percentage
            resource.rag_status = utilization.rag_status

        target_name = resource.name
        try:
            resource = resource_crud.save(db, resource)
        except IntegrityError:
            raise ConflictError(f'Resource with name "{target_name}" already exists in this project')

        logger.info(f"Updated resource {resource.id} fields: {sorted(update_data)}")
        return resource

    @staticmethod
    def archive_resource(db: Session, resource_id: int) -> Resource:
        return CapacityService.update_resource(db, resource_id, ResourceUpdate(is_archived=True))

    @staticmethod
    def delete_resource(db: Session, resource_id: int) -> None:
        """Hard delete a resource together with its weekly workload history."""
        resource = CapacityService.get_resource(db, resource_id)
        resource_crud.delete(db, resource)
        logger.info(f"Deleted resource {resource_id}")

    @staticmethod
    def list_resources(db: Session, project_id: int, include_archived: bool = False) -> List[Resource]:
        return resource_crud.get_resources(db, project_id, include_archived=include_archived)

    @staticmethod
    def filter_resources(db: Session, project_id: int, filters: ResourceFilter) -> List[Resource]:
        return resource_crud.filter_resources(db, project_id, filters)

    # ========================================
    # WEEKLY WORKLOAD
    # ========================================

    @staticmethod
    def upsert_weekly_workload(db: Session, workload_data: ResourceWorkloadUpsert) -> ResourceWorkload:
        """Record a resource's hours for one week, replacing any earlier entry for that week."""
        resource = CapacityService.get_resource(db, workload_data.resource_id)
        if resource.is_archived:
            raise ConflictError("Cannot assign workload to an archived resource")

        week_start, week_end = week_window(workload_data.week_start_date)
        utilization = classify_utilization(workload_data.availability, workload_data.workload)

        row = resource_workload_crud.upsert_week(
            db,
            resource_id=resource.id,
            week_start_date=week_start,
            week_end_date=week_end,
            availability=workload_data.availability,
            workload=workload_data.workload,
            load_percentage=utilization.load_percentage,
            rag_status=utilization.rag_status,
            notes=workload_data.notes,
        )

        logger.info(
            f"Recorded workload for resource {row.resource_id} week {week_start.isoformat()}: "
            f"{row.load_percentage}% {row.rag_status.value}"
        )
        return row

    @staticmethod
    def get_resource_workload(db: Session, resource_id: int) -> List[ResourceWorkload]:
        CapacityService.get_resource(db, resource_id)
        return resource_workload_crud.get_by_resource(db, resource_id)

    # ========================================
    # REPORTS
    # ========================================

    @staticmethod
    def get_heatmap(db: Session, project_id: int, start_date: date, end_date: date) -> List[HeatmapRow]:
        """
        Build per-resource weekly utilization for active resources in a project.

        Only stored weeks appear; a resource with no rows in range is still
        listed with empty ``weekly_data``.
        """
        resources = resource_crud.get_resources(db, project_id, include_archived=False)
        workloads = resource_workload_crud.get_by_project_in_range(db, project_id, start_date, end_date)

        by_resource: Dict[int, List[ResourceWorkload]] = defaultdict(list)
        for row in workloads:
            by_resource[row.resource_id].append(row)

        logger.debug(
            f"Heatmap for project {project_id} {start_date}..{end_date}: "
            f"{len(resources)} resources, {len(workloads)} weekly rows"
        )

        return [
            HeatmapRow(
                resource_id=resource.id,
                resource_name=resource.name,
                role=resource.role,
                weekly_data=[WeeklyWorkload.model_validate(row) for row in by_resource.get(resource.id, [])],
            )
            for resource in resources
        ]

    @staticmethod
    def get_capacity_summary(db: Session, project_id: int) -> CapacitySummary:
        """Count active resources per utilization band from their current snapshot."""
        resources = resource_crud.get_resources(db, project_id, include_archived=False)

        bands = {RAGStatus.GREEN: 0, RAGStatus.AMBER: 0, RAGStatus.RED: 0}
        distribution = {RAGStatus.GREEN: 0, RAGStatus.AMBER: 0, RAGStatus.RED: 0}
        for resource in resources:
            bands[rag_status_for(resource.load_percentage)] += 1
            distribution[resource.rag_status] += 1

        return CapacitySummary(
            total_resources=len(resources),
            underutilized=bands[RAGStatus.GREEN],
            ideal=bands[RAGStatus.AMBER],
            overloaded=bands[RAGStatus.RED],
            rag_distribution=RAGDistribution(
                green=distribution[RAGStatus.GREEN],
                amber=distribution[RAGStatus.AMBER],
                red=distribution[RAGStatus.RED],
            ),
        )
