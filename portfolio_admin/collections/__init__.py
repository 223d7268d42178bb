"""
Content collections managed from the admin dashboard.
"""

from .base_collection import BaseCollection
from .experience import ExperienceCollection
from .projects import ProjectsCollection
from .registry import CollectionRegistry
from .skills import SkillsCollection

__all__ = [
    "BaseCollection",
    "CollectionRegistry",
    "ExperienceCollection",
    "ProjectsCollection",
    "SkillsCollection",
    "build_default_registry",
]


def build_default_registry() -> CollectionRegistry:
    registry = CollectionRegistry()
    registry.register(ProjectsCollection)
    registry.register(SkillsCollection)
    registry.register(ExperienceCollection)
    return registry
