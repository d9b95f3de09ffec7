from sqlalchemy import Column, Integer, String, Enum
from core.db.base import Base
import enum


class UserRole(str, enum.Enum):
    admin = "admin"
    leader = "leader"
    member = "member"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Case-sensitive and never changed after registration
    username = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)

    # Global role is advisory; workspace access comes from WorkspaceMember.role
    role = Column(Enum(UserRole), nullable=False, default=UserRole.member)
    avatar_url = Column(String(1000), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
