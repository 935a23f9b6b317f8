from fastapi_users_db_sqlalchemy import SQLAlchemyBaseUserTableUUID
from sqlalchemy import Column, String, DateTime
from datetime import datetime, timezone
from newsdesk.database import Base


class User(SQLAlchemyBaseUserTableUUID, Base):
    """Dashboard login identity managed by FastAPI-Users."""
    __tablename__ = "users"

    full_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<User {self.email}>"
