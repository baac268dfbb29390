"""
Reference Data Service

Lookups over the static education catalogue, plus the derivation of the
``education_boards`` / ``subjects`` rows that the onboarding endpoints
read from the database.
"""

import re
from dataclasses import dataclass

from app.modules.reference.catalogue import (
    EDUCATION_BOARDS,
    GRADE_LEVELS,
    MATRIC_SUBJECT_GROUPS,
    O_LEVEL_SUBJECT_GROUPS,
)
from app.modules.reference.schemas import (
    BoardType,
    EducationBoardInfo,
    EducationType,
    GradeLevel,
    SubjectGroup,
)


def list_boards() -> list[EducationBoardInfo]:
    """Return every board in the catalogue."""
    return list(EDUCATION_BOARDS)


def boards_by_type(board_type: BoardType) -> list[EducationBoardInfo]:
    """Return boards of the given type; boards examining both tracks always match."""
    return [
        board
        for board in EDUCATION_BOARDS
        if board.type == board_type or board.type == BoardType.BOTH
    ]


def boards_by_province(province: str) -> list[EducationBoardInfo]:
    """Return boards of a province (case-insensitive)."""
    wanted = province.lower()
    return [board for board in EDUCATION_BOARDS if board.province.value.lower() == wanted]


def get_board(board_id: str) -> EducationBoardInfo | None:
    return next((board for board in EDUCATION_BOARDS if board.id == board_id), None)


def subject_groups(education_type: EducationType) -> list[SubjectGroup]:
    if education_type == EducationType.MATRIC:
        return list(MATRIC_SUBJECT_GROUPS)
    return list(O_LEVEL_SUBJECT_GROUPS)


def grade_levels(education_type: EducationType) -> list[GradeLevel]:
    return list(GRADE_LEVELS[education_type])


def subject_names(education_type: EducationType) -> list[str]:
    """Return the sorted, de-duplicated subject names of an education type."""
    names = {name for group in subject_groups(education_type) for name in group.subjects}
    return sorted(names)


def compulsory_subjects(education_type: EducationType) -> set[str]:
    """
    Subjects every student of the track takes.

    A subject is compulsory when a compulsory group contains it, or when it
    appears in every group of the track.
    """
    groups = subject_groups(education_type)
    compulsory = {name for group in groups if group.is_compulsory for name in group.subjects}
    shared = set.intersection(*(set(group.subjects) for group in groups))
    return compulsory | shared


def education_types_for(board_type: BoardType) -> list[EducationType]:
    """Tracks examined by a board of the given type."""
    if board_type == BoardType.BOTH:
        return [EducationType.MATRIC, EducationType.O_LEVEL]
    return [EducationType(board_type.value)]


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


@dataclass(frozen=True)
class SubjectRow:
    """A subject offered by one board for one education track."""

    id: str
    name: str
    code: str
    board_id: str
    education_type: EducationType
    is_compulsory: bool


def subject_rows(board: EducationBoardInfo) -> list[SubjectRow]:
    """
    Derive the subject rows offered by a board.

    IDs and codes are stable across runs so seeding is idempotent.
    """
    rows = []
    for education_type in education_types_for(board.type):
        compulsory = compulsory_subjects(education_type)
        for name in subject_names(education_type):
            slug = _slug(name)
            rows.append(
                SubjectRow(
                    id=f"{board.id}:{education_type.value}:{slug}",
                    name=name,
                    code=f"{board.id}-{education_type.value}-{slug}".upper(),
                    board_id=board.id,
                    education_type=education_type,
                    is_compulsory=name in compulsory,
                )
            )
    return rows
