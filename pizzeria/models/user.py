"""ORM models for users, their role entries and active session tokens."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from pizzeria.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    The password is only ever stored as a bcrypt hash.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    roles = relationship(
        "UserRole",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserRole.id",
        lazy="selectin",
    )


class UserRole(Base):
    """
    One role entry for a user.

    role: 'diner', 'franchisee' or 'admin'. object_id scopes a franchisee
    entry to a single franchise.
    """

    __tablename__ = "user_roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role = Column(String(32), nullable=False, index=True)
    object_id = Column(Integer, nullable=True, index=True)

    user = relationship("User", back_populates="roles")


class AuthToken(Base):
    """An active session: a token digest that may currently authenticate its user."""

    __tablename__ = "auth_tokens"

    token_digest = Column(String(64), primary_key=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
