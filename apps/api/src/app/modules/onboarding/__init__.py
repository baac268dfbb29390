"""
Onboarding Module

Server side of the multi-step onboarding flow, plus the ``wizard`` client
package that drives it.

API Endpoints (public):
- GET /onboarding/boards
- GET /onboarding/subjects
- GET /onboarding/schools/search
- GET /onboarding/check-username/{username}

API Endpoints (authenticated):
- POST /onboarding/student/profile
- POST /onboarding/school/register
- POST /onboarding/schools/join
"""

from .router import router

__all__ = ["router"]
