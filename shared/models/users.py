import enum
import uuid

from sqlalchemy import TIMESTAMP, Column, Enum, String, func
from sqlalchemy.orm import relationship

from shared.core.database import Base


class UserRole(str, enum.Enum):
    admin = "admin"
    staff = "staff"
    volunteer = "volunteer"
    member = "member"


class Users(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # WildApricot contact id
    external_id = Column(String(255), unique=True, index=True, nullable=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(255), nullable=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.member)
    image = Column(String(500), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    login_sessions = relationship(
        "UserLoginSession",
        back_populates="user",
        cascade="all, delete-orphan"
    )
