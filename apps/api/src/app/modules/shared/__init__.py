"""
Shared module - Base classes and errors reused by the feature modules.
"""

from app.modules.shared.errors import OnboardingServiceError
from app.modules.shared.models import BaseModel

__all__ = ["BaseModel", "OnboardingServiceError"]
