import pytest
from datetime import date
from sqlmodel import Session, select

from capacity_tracker.models.project import Project
from capacity_tracker.models.resource import Resource, ResourceWorkload, ResourceRole, RAGStatus

class TestResourceModel:
    def test_create_resource_defaults(self, session: Session, project: Project):
        resource = Resource(project_id=project.id, name="Dana")

        session.add(resource)
        session.commit()
        session.refresh(resource)

        assert resource.id is not None
        assert resource.role == ResourceRole.DEVELOPER
        assert resource.weekly_availability == 40.0
        assert resource.weekly_workload == 0.0
        assert resource.load_percentage == 0.0
        assert resource.rag_status == RAGStatus.GREEN
        assert resource.is_archived is False
        assert resource.skills == []
        assert resource.created_at is not None

    def test_skills_round_trip(self, session: Session, project: Project):
        resource = Resource(project_id=project.id, name="Eli", skills=["react", "figma"])
        session.add(resource)
        session.commit()
        session.refresh(resource)

        assert resource.skills == ["react", "figma"]

    def test_name_unique_per_project(self, session: Session, project: Project):
        session.add(Resource(project_id=project.id, name="Dup"))
        session.commit()

        session.add(Resource(project_id=project.id, name="Dup"))
        with pytest.raises(Exception):  # Should raise integrity error
            session.commit()

    def test_project_relationship(self, session: Session, project: Project):
        resource = Resource(project_id=project.id, name="Fay")
        session.add(resource)
        session.commit()
        session.refresh(project)

        assert resource.project.name == "Apollo"
        assert resource in project.resources

class TestResourceWorkloadModel:
    def _resource(self, session: Session, project: Project) -> Resource:
        resource = Resource(project_id=project.id, name="Gil")
        session.add(resource)
        session.commit()
        session.refresh(resource)
        return resource

    def _week(self, resource_id: int, start: date) -> ResourceWorkload:
        return ResourceWorkload(
            resource_id=resource_id,
            week_start_date=start,
            week_end_date=date(start.year, start.month, start.day + 6),
            availability=40,
            workload=20,
            load_percentage=50.0,
            rag_status=RAGStatus.GREEN
        )

    def test_one_row_per_resource_week(self, session: Session, project: Project):
        resource = self._resource(session, project)
        session.add(self._week(resource.id, date(2025, 3, 3)))
        session.commit()

        session.add(self._week(resource.id, date(2025, 3, 3)))
        with pytest.raises(Exception):  # Should raise integrity error
            session.commit()

    def test_workloads_relationship_ordered(self, session: Session, project: Project):
        resource = self._resource(session, project)
        session.add(self._week(resource.id, date(2025, 3, 10)))
        session.add(self._week(resource.id, date(2025, 3, 3)))
        session.commit()
        session.refresh(resource)

        assert [w.week_start_date for w in resource.workloads] == [date(2025, 3, 3), date(2025, 3, 10)]

    def test_delete_resource_cascades(self, session: Session, project: Project):
        resource = self._resource(session, project)
        session.add(self._week(resource.id, date(2025, 3, 3)))
        session.add(self._week(resource.id, date(2025, 3, 10)))
        session.commit()
        session.refresh(resource)

        session.delete(resource)
        session.commit()

        assert session.exec(select(ResourceWorkload)).all() == []

    def test_delete_project_cascades(self, session: Session, project: Project):
        resource = self._resource(session, project)
        session.add(self._week(resource.id, date(2025, 3, 3)))
        session.commit()
        session.refresh(project)

        session.delete(project)
        session.commit()

        assert session.exec(select(Resource)).all() == []
        assert session.exec(select(ResourceWorkload)).all() == []
