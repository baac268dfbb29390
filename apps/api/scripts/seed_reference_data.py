"""
Seed Education Reference Data

Loads the Pakistani education boards and the subjects each board offers
into the ``education_boards`` and ``subjects`` tables. Safe to run
repeatedly: rows are upserted by their stable IDs.

Usage:
    cd apps/api
    python scripts/seed_reference_data.py
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.modules.onboarding.models import EducationBoard, Subject
from app.modules.reference import service as reference


async def seed_boards(db: AsyncSession) -> int:
    rows = [
        {
            "id": board.id,
            "name": board.name,
            "type": board.type,
            "region": board.province.value,
        }
        for board in reference.list_boards()
    ]
    stmt = insert(EducationBoard).values(rows)
    stmt = stmt.on_conflict_do_update(
        index_elements=[EducationBoard.id],
        set_={"name": stmt.excluded.name, "type": stmt.excluded.type, "region": stmt.excluded.region},
    )
    await db.execute(stmt)
    return len(rows)


async def seed_subjects(db: AsyncSession) -> int:
    rows = [
        {
            "id": row.id,
            "name": row.name,
            "code": row.code,
            "board_id": row.board_id,
            "education_type": row.education_type,
            "is_compulsory": row.is_compulsory,
        }
        for board in reference.list_boards()
        for row in reference.subject_rows(board)
    ]
    stmt = insert(Subject).values(rows)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Subject.id],
        set_={"name": stmt.excluded.name, "is_compulsory": stmt.excluded.is_compulsory},
    )
    await db.execute(stmt)
    return len(rows)


async def seed_reference_data() -> None:
    """Upsert every board and subject from the catalogue."""
    engine = create_async_engine(settings.database_url, echo=False)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as db:
        board_count = await seed_boards(db)
        subject_count = await seed_subjects(db)
        await db.commit()

    print("Reference data seeded successfully!")
    print(f"  Boards: {board_count}")
    print(f"  Subjects: {subject_count}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_reference_data())
