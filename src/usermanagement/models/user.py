import enum
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import BigInteger, Integer, String, DateTime, CheckConstraint, func
from usermanagement.db.session import Base


class UserStatus(str, enum.Enum):
    """Closed set of lifecycle codes stored in ``users.user_status``."""
    ACTIVE = "A"
    INACTIVE = "I"
    TERMINATED = "T"


USER_STATUS_CODES = frozenset(s.value for s in UserStatus)

# ids are BIGINT
USER_ID_MIN = -(2**63)
USER_ID_MAX = 2**63 - 1


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("user_status IN ('A', 'I', 'T')", name="user_status"),
        # ids are never reused, including after deleting the highest one
        {"sqlite_autoincrement": True},
    )

    # sqlite only autoincrements an INTEGER PRIMARY KEY
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    user_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    user_status: Mapped[str] = mapped_column(String(1), nullable=False)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"<User id={self.id} user_name={self.user_name!r}>"
