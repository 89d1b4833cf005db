import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from capacity_tracker.main import app
from capacity_tracker.database.engine import get_db
from capacity_tracker.models.project import Project
from capacity_tracker.models.resource import ResourceRole
from capacity_tracker.schemas.resource import ResourceCreate
from capacity_tracker.services.capacity_service import CapacityService

# Test database setup
@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session

@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_db] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

@pytest.fixture(name="project")
def project_fixture(session: Session):
    project = Project(name="Apollo", description="Capacity test project")
    session.add(project)
    session.commit()
    session.refresh(project)
    return project

@pytest.fixture(name="other_project")
def other_project_fixture(session: Session):
    project = Project(name="Gemini")
    session.add(project)
    session.commit()
    session.refresh(project)
    return project

@pytest.fixture(name="make_resource")
def make_resource_fixture(session: Session, project: Project):
    def _make(name="Ann", role=ResourceRole.DEVELOPER, **kwargs):
        data = ResourceCreate(project_id=kwargs.pop("project_id", project.id), name=name, role=role, **kwargs)
        return CapacityService.create_resource(session, data)

    return _make
