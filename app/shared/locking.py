"""Row locks that serialize writers of one sibling set."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

logger = logging.getLogger(__name__)


async def lock_parents(db: AsyncSession, model: Any, *parent_ids: UUID) -> None:
    """
    Take ``SELECT ... FOR UPDATE`` on the parent rows of a sibling set.

    A structural mutation (insert, reposition, move, delete) reads the
    siblings, computes new positions and writes them back. Holding the
    parent row for the rest of the transaction makes concurrent writers of
    the same set wait for the commit instead of interleaving. Several parents
    are locked in id order so two moves in opposite directions cannot
    deadlock. Dialects without row locks (SQLite) ignore the clause.
    """
    for parent_id in sorted(set(parent_ids), key=str):
        logger.debug("Locking %s %s", model.__tablename__, parent_id)
        await db.execute(select(model.id).where(model.id == parent_id).with_for_update())
