"""
Schools module - Schools registered by school admins.
"""

from app.modules.schools.models import EducationLevel, GenderType, School
from app.modules.schools.repository import SchoolRepository

__all__ = ["EducationLevel", "GenderType", "School", "SchoolRepository"]
