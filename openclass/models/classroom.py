# openclass/models/classroom.py
from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class Category(Base):
    __tablename__ = "categories"

    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text)
    color = Column(String(20))


class Classroom(Base):
    __tablename__ = "classrooms"

    name = Column(String(200), nullable=False, index=True)
    description = Column(Text)
    category = Column(String(100), nullable=False, index=True)
    level = Column(String(20), nullable=False, default="beginner")  # beginner | intermediate | advanced
    owner_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    is_public = Column(Boolean, default=True, nullable=False)
    allow_chat = Column(Boolean, default=True, nullable=False)
    likes_count = Column(Integer, default=0, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="owned_classrooms", lazy="selectin")
    memberships = relationship("ClassroomMembership", back_populates="classroom", cascade="all, delete-orphan")


class ClassroomMembership(Base):
    __tablename__ = "classroom_memberships"

    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    classroom_id = Column(String(64), ForeignKey("classrooms.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False, default="member")  # owner | member

    __table_args__ = (
        UniqueConstraint("user_id", "classroom_id", name="uq_membership_user_classroom"),
    )

    # Relationships
    user = relationship("User", back_populates="memberships")
    classroom = relationship("Classroom", back_populates="memberships")


class ClassroomLike(Base):
    __tablename__ = "classroom_likes"

    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    classroom_id = Column(String(64), ForeignKey("classrooms.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "classroom_id", name="uq_classroom_like_user_classroom"),
    )

    classroom = relationship("Classroom", lazy="selectin")
