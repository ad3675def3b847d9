"""
EditMatch — ORM model registry.

Importing every model here ensures that Alembic (and any other tool that
inspects ``Base.metadata``) discovers all tables automatically.
"""

from editmatch.models.user import User
from editmatch.models.project import Project
from editmatch.models.niche import Niche
from editmatch.models.freelancer import FreelancerProfile

__all__ = [
    "User",
    "Project",
    "Niche",
    "FreelancerProfile",
]
