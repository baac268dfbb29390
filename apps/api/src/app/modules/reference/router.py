"""
Reference Data Router

Public, read-only endpoints over the Pakistani education catalogue.

Endpoints:
- GET /boards/all - Every board
- GET /boards/type/{type} - Boards examining matric, o_level (or both)
- GET /boards/province/{province} - Boards of a province
- GET /boards/board/{id} - One board
- GET /boards/subject-groups/{type} - Subject groups of a track
- GET /boards/grade-levels/{type} - Grade levels of a track
- GET /boards/subjects/{type} - All subject names of a track
"""

import logging

from fastapi import APIRouter, HTTPException, status

from app.modules.reference import service
from app.modules.reference.schemas import (
    BoardListResponse,
    BoardResponse,
    BoardType,
    EducationType,
    GradeLevelListResponse,
    SubjectGroupListResponse,
    SubjectNameListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_board_type(value: str) -> BoardType:
    try:
        return BoardType(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "INVALID_BOARD_TYPE",
                "message": 'Invalid board type. Must be "matric", "o_level", or "both"',
            },
        ) from None


def _parse_education_type(value: str) -> EducationType:
    try:
        return EducationType(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "INVALID_EDUCATION_TYPE",
                "message": 'Invalid education type. Must be "matric" or "o_level"',
            },
        ) from None


@router.get("/all", response_model=BoardListResponse, summary="List All Boards")
async def get_all_boards() -> BoardListResponse:
    return BoardListResponse(boards=service.list_boards())


@router.get("/type/{board_type}", response_model=BoardListResponse, summary="List Boards By Type")
async def get_boards_by_type(board_type: str) -> BoardListResponse:
    """Boards examining the given track. Boards examining both tracks are always included."""
    return BoardListResponse(boards=service.boards_by_type(_parse_board_type(board_type)))


@router.get(
    "/province/{province}",
    response_model=BoardListResponse,
    summary="List Boards By Province",
)
async def get_boards_by_province(province: str) -> BoardListResponse:
    return BoardListResponse(boards=service.boards_by_province(province))


@router.get("/board/{board_id}", response_model=BoardResponse, summary="Get Board")
async def get_board(board_id: str) -> BoardResponse:
    """
    Get a single board by its catalogue ID.

    Raises:
        HTTPException 404: If the board is not in the catalogue
    """
    board = service.get_board(board_id)
    if board is None:
        logger.info(f"Unknown board requested: {board_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "BOARD_NOT_FOUND", "message": "Education board not found"},
        )
    return BoardResponse(board=board)


@router.get(
    "/subject-groups/{education_type}",
    response_model=SubjectGroupListResponse,
    summary="List Subject Groups",
)
async def get_subject_groups(education_type: str) -> SubjectGroupListResponse:
    groups = service.subject_groups(_parse_education_type(education_type))
    return SubjectGroupListResponse(subject_groups=groups)


@router.get(
    "/grade-levels/{education_type}",
    response_model=GradeLevelListResponse,
    summary="List Grade Levels",
)
async def get_grade_levels(education_type: str) -> GradeLevelListResponse:
    levels = service.grade_levels(_parse_education_type(education_type))
    return GradeLevelListResponse(grade_levels=levels)


@router.get(
    "/subjects/{education_type}",
    response_model=SubjectNameListResponse,
    summary="List Subject Names",
)
async def get_all_subjects(education_type: str) -> SubjectNameListResponse:
    names = service.subject_names(_parse_education_type(education_type))
    return SubjectNameListResponse(subjects=names)
