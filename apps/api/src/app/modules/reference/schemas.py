"""
Reference Data Schemas

Pydantic models for the Pakistani education board catalogue.
Fields are exposed in camelCase on the wire.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BoardType(str, Enum):
    """Curricula examined by a board."""

    MATRIC = "matric"
    O_LEVEL = "o_level"
    BOTH = "both"


class EducationType(str, Enum):
    """Education track a student follows."""

    MATRIC = "matric"
    O_LEVEL = "o_level"


class Province(str, Enum):
    """Province or territory a board belongs to."""

    ISLAMABAD = "Islamabad"
    PUNJAB = "Punjab"
    SINDH = "Sindh"
    KPK = "KPK"
    BALOCHISTAN = "Balochistan"
    AJK = "AJK"


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class EducationBoardInfo(CamelModel):
    """An examining board from the catalogue."""

    id: str
    name: str
    type: BoardType
    province: Province
    established: int
    jurisdiction: list[str]
    website: str | None = None


class SubjectGroup(CamelModel):
    """A named bundle of subjects offered together."""

    id: str
    name: str
    education_type: EducationType
    board_type: list[BoardType]
    subjects: list[str]
    is_compulsory: bool = False


class GradeLevel(CamelModel):
    """A class/grade a student can be enrolled in."""

    id: str
    name: str
    level: int = Field(..., ge=1)


class BoardListResponse(BaseModel):
    boards: list[EducationBoardInfo]


class BoardResponse(BaseModel):
    board: EducationBoardInfo


class SubjectGroupListResponse(CamelModel):
    subject_groups: list[SubjectGroup]


class GradeLevelListResponse(CamelModel):
    grade_levels: list[GradeLevel]


class SubjectNameListResponse(BaseModel):
    subjects: list[str]
