from capacity_tracker.models.project import Project
from capacity_tracker.models.resource import Resource, ResourceWorkload, ResourceRole, RAGStatus

__all__ = ["Project", "Resource", "ResourceWorkload", "ResourceRole", "RAGStatus"]
