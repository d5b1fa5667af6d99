# store.py
"""
Persistence gateway for designs, votes and signups.

Each public method runs exactly one statement in its own session, so
concurrent requests never share a session and every mutation is atomic
at the database. Any failure talking to the database, whether raised
by SQLAlchemy or by the driver underneath it, surfaces as a StorageError.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import async_sessionmaker

from merchlab.errors import StorageError
from merchlab.models import Design, Signup

logger = logging.getLogger(__name__)

# Dialects with an INSERT ... ON CONFLICT DO NOTHING construct.
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class DesignStore:
    """Reads and writes TeeLab designs and email signups."""

    def __init__(self, session_maker: async_sessionmaker):
        self._session_maker = session_maker

    async def create_design(
        self, title: str, description: str, image_url: str, user_id: Optional[int]
    ) -> Design:
        """Inserts a design with zero votes and returns the stored row."""
        design = Design(
            title=title,
            description=description,
            image_url=image_url,
            user_id=user_id,
            votes=0,
        )
        async with self._session_maker() as session:
            try:
                session.add(design)
                await session.commit()
            except Exception as e:
                await session.rollback()
                raise StorageError("create_design", e) from e
        logger.info(f"Stored design {design.id} ({image_url}).")
        return design

    async def increment_vote(self, design_id: int) -> bool:
        """
        Adds one vote to a design.

        Returns:
            True if a row was updated. An unknown id is not an error and
            returns False.
        """
        stmt = (
            update(Design)
            .where(Design.id == design_id)
            .values(votes=Design.votes + 1)
        )
        async with self._session_maker() as session:
            try:
                result = await session.execute(stmt)
                updated = result.rowcount
                await session.commit()
            except Exception as e:
                await session.rollback()
                raise StorageError("increment_vote", e) from e
        if updated == 0:
            logger.info(f"Vote for unknown design {design_id} ignored.")
            return False
        return True

    async def list_designs(self) -> List[Design]:
        """All designs, most voted first; equal votes keep insertion order."""
        query = select(Design).order_by(Design.votes.desc(), Design.id.asc())
        async with self._session_maker() as session:
            try:
                result = await session.execute(query)
            except Exception as e:
                raise StorageError("list_designs", e) from e
            return list(result.scalars().all())

    async def create_signup(self, email: str) -> bool:
        """
        Records an email signup. Signing up twice keeps a single row.

        Returns:
            True if a new row was written, False if the email was already
            signed up.
        """
        async with self._session_maker() as session:
            insert = _UPSERT_INSERTS.get(session.bind.dialect.name)
            if insert is None:
                raise StorageError(
                    "create_signup",
                    RuntimeError(f"Unsupported dialect: {session.bind.dialect.name}"),
                )
            stmt = (
                insert(Signup)
                .values(email=email)
                .on_conflict_do_nothing(index_elements=[Signup.email])
            )
            try:
                result = await session.execute(stmt)
                inserted = result.rowcount
                await session.commit()
            except Exception as e:
                await session.rollback()
                raise StorageError("create_signup", e) from e
        return inserted == 1

