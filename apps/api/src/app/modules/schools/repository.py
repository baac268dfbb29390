"""
School Repository

Database operations for school management.
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.schools.models import EducationLevel, GenderType, School

logger = logging.getLogger(__name__)

# Maximum number of results returned by search
SEARCH_LIMIT = 10


class SchoolRepository:
    """Repository for school database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        name: str,
        registration_number: str,
        principal_name: str,
        email: str,
        contact_number: str,
        address: str,
        city: str,
        school_code: str,
        registration_proof_url: str,
        admin_id: str,
        established_year: int | None = None,
        website: str | None = None,
        education_level: EducationLevel = EducationLevel.BOTH,
        gender_type: GenderType = GenderType.CO_EDUCATION,
        logo_url: str | None = None,
    ) -> School:
        """
        Create a new school record.

        Args:
            db: Database session
            name: School name
            registration_number: Government registration number (unique)
            principal_name: Name of the principal
            email: School email address
            contact_number: School phone number
            address: Full address
            city: City name
            school_code: 6-character join code (unique)
            registration_proof_url: URL of the stored registration proof
            admin_id: ID of the registering school admin
            established_year: Year the school was established (optional)
            website: School website (optional)
            education_level: Curricula taught
            gender_type: Admission policy
            logo_url: URL of the stored logo (optional)

        Returns:
            Created School instance
        """
        school = School(
            name=name,
            registration_number=registration_number,
            established_year=established_year,
            principal_name=principal_name,
            email=email,
            contact_number=contact_number,
            address=address,
            city=city,
            website=website,
            education_level=education_level,
            gender_type=gender_type,
            registration_proof_url=registration_proof_url,
            logo_url=logo_url,
            school_code=school_code,
            admin_id=admin_id,
            is_verified=False,
        )

        db.add(school)
        await db.flush()
        await db.refresh(school)

        logger.info(f"Created school: {school.id} - {school.name} ({school.school_code})")
        return school

    @staticmethod
    async def get_by_id(db: AsyncSession, school_id: str | UUID) -> School | None:
        """Get a school by ID."""
        result = await db.execute(select(School).where(School.id == str(school_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_code(db: AsyncSession, school_code: str) -> School | None:
        """Get a school by its join code (case-insensitive)."""
        result = await db.execute(select(School).where(School.school_code == school_code.upper()))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_registration_number(
        db: AsyncSession, registration_number: str
    ) -> School | None:
        """Get a school by registration number (case-insensitive)."""
        result = await db.execute(
            select(School).where(
                func.lower(School.registration_number) == registration_number.lower()
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def code_exists(db: AsyncSession, school_code: str) -> bool:
        """Check if a join code is already in use."""
        return await SchoolRepository.get_by_code(db, school_code) is not None

    @staticmethod
    async def search(
        db: AsyncSession,
        query: str,
        city: str | None = None,
        limit: int = SEARCH_LIMIT,
    ) -> list[School]:
        """
        Search schools by name, optionally narrowed by city.

        Both filters are case-insensitive substring matches.

        Args:
            db: Database session
            query: Part of the school name
            city: Part of the city name (optional)
            limit: Maximum number of results

        Returns:
            Matching schools ordered by name
        """
        stmt = select(School).where(School.name.icontains(query, autoescape=True))
        if city:
            stmt = stmt.where(School.city.icontains(city, autoescape=True))

        result = await db.execute(stmt.order_by(School.name).limit(limit))
        return list(result.scalars().all())
