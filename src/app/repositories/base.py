"""Base repository shared by every table."""

from typing import Any
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.app.core.exceptions import ValidationError
from src.app.schemas.pagination import decode_cursor, encode_cursor

type Page[ModelType] = tuple[list[ModelType], str | None, bool]


class BaseRepository[ModelType: SQLModel]:
    """Reads and staged writes for one model.

    Repositories never commit; the owning service decides when a unit of
    work ends.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        query = select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        return (await self.session.execute(query)).scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)

    async def paginate(
        self,
        query: Any,
        cursor: str | None,
        limit: int,
        *,
        newest_first: bool = True,
    ) -> Page[ModelType]:
        """Run ``query`` one page at a time, keyed on ``(created_at, id)``.

        Returns:
            Tuple of (items, next_cursor, has_more)

        Raises:
            ValidationError: The cursor is malformed.
        """
        created_at = self.model.created_at  # type: ignore[attr-defined]
        id_ = self.model.id  # type: ignore[attr-defined]

        if cursor:
            try:
                after_created, after_id = decode_cursor(cursor)
            except ValueError as e:
                raise ValidationError("Invalid cursor") from e
            if newest_first:
                query = query.where(
                    or_(
                        created_at < after_created,
                        and_(created_at == after_created, id_ < after_id),
                    )
                )
            else:
                query = query.where(
                    or_(
                        created_at > after_created,
                        and_(created_at == after_created, id_ > after_id),
                    )
                )

        order = (created_at.desc(), id_.desc()) if newest_first else (created_at, id_)
        # One extra row tells us whether another page exists
        result = await self.session.execute(query.order_by(*order).limit(limit + 1))
        items = list(result.scalars().all())

        has_more = len(items) > limit
        items = items[:limit]
        next_cursor = None
        if has_more:
            last = items[-1]
            next_cursor = encode_cursor(last.created_at, last.id)  # type: ignore[attr-defined]

        return items, next_cursor, has_more
