# capacity_tracker/routers/projects.py
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import List

from capacity_tracker.core.errors import NotFoundError
from capacity_tracker.database.engine import get_db
from capacity_tracker.crud.project import project_crud
from capacity_tracker.schemas.common import ERROR_RESPONSES
from capacity_tracker.schemas.project import ProjectCreate, Project

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
    responses={404: ERROR_RESPONSES[404]},
)

@router.post("/", response_model=Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    db: Session = Depends(get_db)
):
    """Create a new project."""
    project = project_crud.create_project(db, project_data)
    return Project.model_validate(project)

@router.get("/", response_model=List[Project])
def get_projects(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get list of projects."""
    projects = project_crud.get_projects(db, skip=skip, limit=limit)
    return [Project.model_validate(p) for p in projects]

@router.get("/{project_id}", response_model=Project)
def get_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Get project by ID."""
    project = project_crud.get_project(db, project_id)
    if not project:
        raise NotFoundError("Project", project_id)
    return Project.model_validate(project)
