from datetime import datetime
from typing import Union

from order_desk.core.config import db_logger
from order_desk.db.config import Base

from sqlalchemy import func, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select


# Create models here
class Blob(Base):
    """A whole collection serialized under one logical key."""

    __tablename__ = "blobs"

    key: Mapped[str] = mapped_column(primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"Blob(key={self.key!r}, size={len(self.value)})"

    @classmethod
    async def get(cls, session: AsyncSession, key: str) -> Union["Blob", None]:
        """
        Retrieve a Blob record by key.
        Args:
            session (AsyncSession): The SQLAlchemy asynchronous session to use for the query.
            key (str): The logical key of the collection.
        Returns:
            Union["Blob", None]: The Blob object if found, otherwise None.
        Raises:
            ValueError: If the key is empty.
        Example:
            blob = await Blob.get(session, "orders")
        """
        if not key:
            db_logger.warning("No key provided to fetch a Blob.")
            raise ValueError("No key provided")

        db_logger.info(f"Fetching Blob with key: {key!r}")
        result = await session.execute(select(cls).where(cls.key == key))
        blob = result.scalar_one_or_none()

        if blob:
            db_logger.info(f"Blob found: {blob}")
        else:
            db_logger.info(f"No Blob found for key: {key!r}")

        return blob

    @classmethod
    async def put(cls, session: AsyncSession, key: str, value: str) -> "Blob":
        """
        Creates or replaces the Blob stored under the key. The caller owns the transaction.
        Args:
            session (AsyncSession): The SQLAlchemy asynchronous session to use for the operation.
            key (str): The logical key of the collection.
            value (str): The serialized collection.
        Returns:
            Blob: The stored Blob object.
        """
        blob = await cls.get(session, key)
        if blob is None:
            db_logger.info(f"Creating Blob(key={key!r})")
            blob = cls(key=key, value=value)
            session.add(blob)
        else:
            db_logger.info(f"Replacing Blob(key={key!r})")
            blob.value = value
            session.add(blob)  # Ensure the object is tracked

        await session.flush()
        return blob

    async def delete(self, session: AsyncSession) -> None:
        """
        Deletes the current Blob. The caller owns the transaction.

        Args:
            session (AsyncSession): The SQLAlchemy async session to use for the operation.

        Returns:
            None
        """
        db_logger.info(f"Deleting Blob(key={self.key!r})")
        await session.delete(self)
        await session.flush()
        return None
