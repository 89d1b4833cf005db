# capacity_tracker/crud/project.py
from sqlmodel import Session, select
from typing import List, Optional

from capacity_tracker.models.project import Project
from capacity_tracker.schemas.project import ProjectCreate

class ProjectCRUD:
    def create_project(self, db: Session, project_data: ProjectCreate) -> Project:
        """Create a new project."""
        project = Project(**project_data.model_dump())
        db.add(project)
        db.commit()
        db.refresh(project)
        return project

    def get_project(self, db: Session, project_id: int) -> Optional[Project]:
        """Get project by ID."""
        return db.get(Project, project_id)

    def get_projects(self, db: Session, skip: int = 0, limit: int = 100) -> List[Project]:
        """Get projects ordered by name."""
        query = select(Project).order_by(Project.name).offset(skip).limit(limit)
        return db.exec(query).all()

project_crud = ProjectCRUD()
