"""
Onboarding Router

API endpoints consumed by the onboarding wizard.

Endpoints (public):
- GET /onboarding/boards - Education boards, optionally for one track
- GET /onboarding/subjects - Subjects of a board for a track
- GET /onboarding/schools/search - Search registered schools (top 10)
- GET /onboarding/check-username/{username} - Username availability

Endpoints (authenticated student or school admin):
- POST /onboarding/student/profile - Complete student onboarding (JSON or multipart)
- POST /onboarding/school/register - Register a school (multipart)
- POST /onboarding/schools/join - Join a school with its code

Security:
- Bearer token required on the completion endpoints (401 otherwise)
- Rate limiting on the per-keystroke lookups (username check, school search)
- Uploads validated by kind (image / document) and size before storage
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from app.core.auth import CurrentUser, get_onboarding_user
from app.core.config import settings
from app.core.database import get_db
from app.core.rate_limit import rate_limit, route_key
from app.core.uploads import Upload, UploadKind, UploadRejectedError
from app.modules.onboarding import service
from app.modules.onboarding.schemas import (
    BoardsResponse,
    EducationBoardOut,
    JoinSchoolRequest,
    JoinSchoolResponse,
    SchoolOut,
    SchoolRegistrationCreate,
    SchoolRegistrationResponse,
    SchoolSearchResponse,
    SchoolSummary,
    StudentProfileCreate,
    StudentProfileOut,
    StudentProfileResponse,
    SubjectOut,
    SubjectsResponse,
    UsernameAvailabilityResponse,
    error_field,
)
from app.modules.reference.schemas import EducationType
from app.modules.shared.errors import OnboardingServiceError

logger = logging.getLogger(__name__)

router = APIRouter()

# Form fields that may repeat in multipart bodies
LIST_FIELDS = frozenset({"subjectIds", "interests"})

_INTERNAL_ERROR = {
    "error": "INTERNAL_ERROR",
    "message": "An unexpected error occurred. Please try again later.",
}


# =============================================================================
# Request helpers
# =============================================================================


def _validation_failed(errors: list[dict[str, str]]) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "error": "VALIDATION_FAILED",
            "message": "Validation failed",
            "errors": errors,
        },
    )


def _field_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors into [{field, message}] keyed by wire name."""
    errors = []
    for error in exc.errors():
        field = error_field(error["loc"]) or "body"
        message = error["msg"].removeprefix("Value error, ")
        errors.append({"field": field, "message": message})
    return errors


def _is_multipart(request: Request) -> bool:
    return request.headers.get("content-type", "").startswith("multipart/form-data")


async def _read_form(request: Request) -> tuple[dict[str, Any], dict[str, UploadFile]]:
    """
    Split a multipart body into plain fields and files.

    Repeated keys (``subjectIds``, ``interests``, optionally with a ``[]``
    suffix) are collected into lists; empty values are dropped.
    """
    form = await request.form()
    fields: dict[str, Any] = {}
    files: dict[str, UploadFile] = {}

    for raw_key, value in form.multi_items():
        key = raw_key.removesuffix("[]")
        if isinstance(value, UploadFile):
            if value.filename:
                files[key] = value
            continue
        if value == "":
            continue
        if key in LIST_FIELDS:
            fields.setdefault(key, []).append(value)
        else:
            fields[key] = value

    return fields, files


async def _read_json(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise _validation_failed([{"field": "body", "message": "Invalid JSON body"}]) from None
    if not isinstance(body, dict):
        raise _validation_failed([{"field": "body", "message": "Expected a JSON object"}])
    return body


async def _to_upload(field: str, file: UploadFile, kind: UploadKind, max_bytes: int) -> Upload:
    content = await file.read()
    try:
        return Upload.create(
            kind,
            file.filename or field,
            content,
            declared_mime=file.content_type,
            max_bytes=max_bytes,
        )
    except UploadRejectedError as e:
        logger.warning(f"Upload rejected for {field}: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "INVALID_UPLOAD",
                "message": e.message,
                "errors": [{"field": field, "message": e.message}],
            },
        ) from e


def _service_error(e: OnboardingServiceError) -> HTTPException:
    return HTTPException(
        status_code=e.status_code,
        detail={"error": e.error_code, "message": e.message},
    )


# =============================================================================
# Reference lookups
# =============================================================================


@router.get("/boards", response_model=BoardsResponse, summary="List Education Boards")
async def get_boards(
    board_type: str | None = Query(None, alias="type"),
    db: AsyncSession = Depends(get_db),
) -> BoardsResponse:
    """
    List education boards.

    ``type=matric`` or ``type=o_level`` returns the boards examining that
    track plus boards examining both; any other value returns every board.
    """
    boards = await service.get_boards(db, board_type)
    return BoardsResponse(boards=[EducationBoardOut.model_validate(board) for board in boards])


@router.get("/subjects", response_model=SubjectsResponse, summary="List Subjects")
async def get_subjects(
    board_id: str | None = Query(None, alias="boardId"),
    education_type: str | None = Query(None, alias="educationType"),
    db: AsyncSession = Depends(get_db),
) -> SubjectsResponse:
    """
    List the subjects a board offers for a track.

    Raises:
        HTTPException 400: If boardId is missing or educationType is not matric/o_level
    """
    if not board_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "BAD_REQUEST", "message": "Board ID is required"},
        )

    try:
        track = EducationType(education_type or "")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "BAD_REQUEST", "message": "Invalid education type"},
        ) from None

    subjects = await service.get_subjects(db, board_id, track)
    return SubjectsResponse(subjects=[SubjectOut.model_validate(subject) for subject in subjects])


@router.get("/schools/search", response_model=SchoolSearchResponse, summary="Search Schools")
@rate_limit(limit=60, window_seconds=60, key_func=route_key)
async def search_schools(
    request: Request,
    query: str | None = Query(None),
    city: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> SchoolSearchResponse:
    """
    Search registered schools by name, optionally within a city.

    Raises:
        HTTPException 400: If no query is given
        HTTPException 429: If the rate limit is exceeded
    """
    if not query or not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "BAD_REQUEST", "message": "Search query is required"},
        )

    schools = await service.search_schools(db, query, city)
    return SchoolSearchResponse(schools=[SchoolSummary.model_validate(s) for s in schools])


@router.get(
    "/check-username/{username}",
    response_model=UsernameAvailabilityResponse,
    summary="Check Username Availability",
)
@rate_limit(limit=30, window_seconds=60, key_func=route_key)
async def check_username(
    request: Request,
    username: str,
    db: AsyncSession = Depends(get_db),
) -> UsernameAvailabilityResponse:
    if not username.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "BAD_REQUEST", "message": "Username is required"},
        )

    available = await service.is_username_available(db, username)
    return UsernameAvailabilityResponse(available=available)


# =============================================================================
# Completion
# =============================================================================


@router.post(
    "/student/profile",
    response_model=StudentProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Complete Student Profile",
    description="""
Complete onboarding for the authenticated student.

Accepts a JSON body, or a multipart body when a profile picture is attached
(file field `profileImage`, repeated `subjectIds` / `interests` fields).

**Errors:**
- 400 `VALIDATION_FAILED` with field-level `errors`
- 400 `INVALID_SUBJECTS` when a subject isn't offered by the board
- 404 when the board or the chosen school doesn't exist
- 409 when the profile already exists
""",
)
async def complete_student_profile(
    request: Request,
    user: CurrentUser = Depends(get_onboarding_user),
    db: AsyncSession = Depends(get_db),
) -> StudentProfileResponse:
    profile_image = None
    if _is_multipart(request):
        fields, files = await _read_form(request)
        if "profileImage" in files:
            profile_image = await _to_upload(
                "profileImage",
                files["profileImage"],
                UploadKind.IMAGE,
                settings.max_image_upload_bytes,
            )
    else:
        fields = await _read_json(request)

    try:
        data = StudentProfileCreate.model_validate(fields)
    except ValidationError as e:
        logger.info(f"Student profile rejected for user {user.id}: {e.error_count()} errors")
        raise _validation_failed(_field_errors(e)) from e

    try:
        profile = await service.complete_student_profile(db, user.id, data, profile_image)
    except OnboardingServiceError as e:
        logger.warning(f"Student onboarding failed for user {user.id}: {e.message}")
        raise _service_error(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error completing student profile: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_INTERNAL_ERROR
        ) from e

    return StudentProfileResponse(profile=StudentProfileOut.model_validate(profile))


@router.post(
    "/school/register",
    response_model=SchoolRegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register School",
    description="""
Register a school and make the authenticated user its admin.

Multipart body: school fields plus the files `registrationProof` (required,
image or PDF up to 5 MB) and `logo` (optional image up to 2 MB).

The response carries the 6-character `schoolCode` students use to join.
""",
)
async def register_school(
    request: Request,
    user: CurrentUser = Depends(get_onboarding_user),
    db: AsyncSession = Depends(get_db),
) -> SchoolRegistrationResponse:
    if _is_multipart(request):
        fields, files = await _read_form(request)
    else:
        fields, files = await _read_json(request), {}

    errors: list[dict[str, str]] = []
    data = None
    try:
        data = SchoolRegistrationCreate.model_validate(fields)
    except ValidationError as e:
        errors.extend(_field_errors(e))
    if "registrationProof" not in files:
        errors.append({"field": "registrationProof", "message": "Registration proof is required"})
    if errors or data is None:
        logger.info(f"School registration rejected for user {user.id}: {len(errors)} errors")
        raise _validation_failed(errors)

    proof = await _to_upload(
        "registrationProof",
        files["registrationProof"],
        UploadKind.DOCUMENT,
        settings.max_document_upload_bytes,
    )
    logo = None
    if "logo" in files:
        logo = await _to_upload(
            "logo", files["logo"], UploadKind.IMAGE, settings.max_image_upload_bytes
        )

    try:
        school = await service.register_school(db, user.id, data, proof, logo)
    except OnboardingServiceError as e:
        logger.warning(f"School registration failed for user {user.id}: {e.message}")
        raise _service_error(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error registering school: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_INTERNAL_ERROR
        ) from e

    return SchoolRegistrationResponse(school=SchoolOut.model_validate(school))


@router.post("/schools/join", response_model=JoinSchoolResponse, summary="Join School")
async def join_school(
    data: JoinSchoolRequest,
    user: CurrentUser = Depends(get_onboarding_user),
    db: AsyncSession = Depends(get_db),
) -> JoinSchoolResponse:
    """
    Join a school with its 6-character code.

    Raises:
        HTTPException 404: If no school has the code
    """
    try:
        school = await service.join_school(db, user.id, data.school_code)
    except OnboardingServiceError as e:
        raise _service_error(e) from e

    return JoinSchoolResponse(
        school=SchoolSummary.model_validate(school),
        message=f"You have joined {school.name}",
    )
