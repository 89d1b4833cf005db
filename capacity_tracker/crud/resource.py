# capacity_tracker/crud/resource.py
"""
Persistence for resources and their weekly workload rows.

These classes only read and write rows; business rules (name uniqueness,
custom roles, archived resources) live in CapacityService.
"""
from sqlmodel import Session, select
from sqlalchemy import insert, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from typing import List, Optional
from datetime import date, datetime

from capacity_tracker.models.resource import Resource, ResourceWorkload, RAGStatus
from capacity_tracker.schemas.resource import ResourceFilter

# Dialects whose INSERT supports ON CONFLICT DO UPDATE
NATIVE_UPSERT_DIALECTS = ("postgresql", "sqlite")

class ResourceCRUD:
    def get_resource(self, db: Session, resource_id: int) -> Optional[Resource]:
        """Get resource by ID."""
        return db.get(Resource, resource_id)

    def get_by_name(self, db: Session, project_id: int, name: str) -> Optional[Resource]:
        """Get a resource by exact name within a project, archived or not."""
        query = select(Resource).where(Resource.project_id == project_id, Resource.name == name)
        return db.exec(query).first()

    def get_resources(self, db: Session, project_id: int, include_archived: bool = False) -> List[Resource]:
        """Get a project's resources ordered by name."""
        query = select(Resource).where(Resource.project_id == project_id)

        if not include_archived:
            query = query.where(Resource.is_archived == False)  # noqa: E712

        return db.exec(query.order_by(Resource.name)).all()

    def filter_resources(self, db: Session, project_id: int, filters: ResourceFilter) -> List[Resource]:
        """Get resources matching every supplied filter, ordered by name."""
        query = select(Resource).where(Resource.project_id == project_id)

        if filters.role:
            query = query.where(Resource.role == filters.role)
        if filters.name:
            query = query.where(Resource.name.icontains(filters.name, autoescape=True))
        if filters.min_load is not None:
            query = query.where(Resource.load_percentage >= filters.min_load)
        if filters.max_load is not None:
            query = query.where(Resource.load_percentage <= filters.max_load)
        if filters.is_archived is not None:
            query = query.where(Resource.is_archived == filters.is_archived)

        return db.exec(query.order_by(Resource.name)).all()

    def save(self, db: Session, resource: Resource) -> Resource:
        """Persist a new or modified resource in a single commit."""
        resource.updated_at = datetime.utcnow()
        db.add(resource)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise
        db.refresh(resource)
        return resource

    def delete(self, db: Session, resource: Resource) -> None:
        """Delete a resource; its weekly rows go with it."""
        db.delete(resource)
        db.commit()

class ResourceWorkloadCRUD:
    def get_week(self, db: Session, resource_id: int, week_start_date: date) -> Optional[ResourceWorkload]:
        """Get the row for one resource and week."""
        query = select(ResourceWorkload).where(
            ResourceWorkload.resource_id == resource_id,
            ResourceWorkload.week_start_date == week_start_date
        )
        return db.exec(query).first()

    def upsert_week(
        self,
        db: Session,
        resource_id: int,
        week_start_date: date,
        week_end_date: date,
        availability: float,
        workload: float,
        load_percentage: float,
        rag_status: RAGStatus,
        notes: Optional[str] = None
    ) -> ResourceWorkload:
        """
        Insert or update the row keyed by (resource_id, week_start_date).

        Runs as one statement where the dialect supports ON CONFLICT so that
        overlapping writers never interleave their fields. Notes are only
        overwritten when a value is supplied.
        """
        now = datetime.utcnow()
        changes = {
            "availability": availability,
            "workload": workload,
            "load_percentage": load_percentage,
            "rag_status": rag_status,
            "updated_at": now,
        }
        if notes is not None:
            changes["notes"] = notes

        values = {
            "resource_id": resource_id,
            "week_start_date": week_start_date,
            "week_end_date": week_end_date,
            "notes": notes,
            "created_at": now,
            **changes,
        }

        table = ResourceWorkload.__table__
        dialect = db.get_bind().dialect.name

        if dialect in NATIVE_UPSERT_DIALECTS:
            dialect_insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = dialect_insert(table).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[table.c.resource_id, table.c.week_start_date],
                set_={key: getattr(stmt.excluded, key) for key in changes}
            )
            db.exec(stmt)
        else:
            # Unique constraint arbitrates: a losing insert becomes an update
            try:
                with db.begin_nested():
                    db.exec(insert(table).values(**values))
            except IntegrityError:
                db.exec(
                    update(table)
                    .where(table.c.resource_id == resource_id, table.c.week_start_date == week_start_date)
                    .values(**changes)
                )

        db.commit()
        return self.get_week(db, resource_id, week_start_date)

    def get_by_resource(self, db: Session, resource_id: int) -> List[ResourceWorkload]:
        """Get all weekly rows for a resource, oldest week first."""
        query = (
            select(ResourceWorkload)
            .where(ResourceWorkload.resource_id == resource_id)
            .order_by(ResourceWorkload.week_start_date)
        )
        return db.exec(query).all()

    def get_by_project_in_range(
        self,
        db: Session,
        project_id: int,
        start_date: date,
        end_date: date
    ) -> List[ResourceWorkload]:
        """Get a project's weekly rows whose week starts within [start_date, end_date]."""
        query = (
            select(ResourceWorkload)
            .join(Resource, ResourceWorkload.resource_id == Resource.id)
            .where(
                Resource.project_id == project_id,
                ResourceWorkload.week_start_date >= start_date,
                ResourceWorkload.week_start_date <= end_date
            )
            .order_by(ResourceWorkload.week_start_date, ResourceWorkload.resource_id)
        )
        return db.exec(query).all()

# Create instances
resource_crud = ResourceCRUD()
resource_workload_crud = ResourceWorkloadCRUD()
