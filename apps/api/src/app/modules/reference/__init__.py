"""
Reference Data Module

Pakistani education boards, subject groups and grade levels.

API Endpoints (public):
- GET /boards/all
- GET /boards/type/{type}
- GET /boards/province/{province}
- GET /boards/board/{id}
- GET /boards/subject-groups/{type}
- GET /boards/grade-levels/{type}
- GET /boards/subjects/{type}
"""

from .router import router

__all__ = ["router"]
