from datetime import datetime, time
from typing import Any
from uuid import UUID

from sqlalchemy import DateTime, String, Time, func
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class RestaurantModel(Base):
    __tablename__ = 'restaurant'

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default='', index=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False, default='')
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False, default='')
    open_time: Mapped[time] = mapped_column(Time(timezone=False), nullable=False)
    close_time: Mapped[time] = mapped_column(Time(timezone=False), nullable=False)
    # Embedded menu, in display order: [{"id": "...", "name": "...", "price": 120.0}, ...]
    foods: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
