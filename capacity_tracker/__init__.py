# Import all models to ensure they are registered with SQLModel
from capacity_tracker.models import project, resource

__all__ = [
    "project",
    "resource",
]
