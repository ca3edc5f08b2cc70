# openclass/models/user.py
from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship
from .base import Base


class User(Base):
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=True)
    name = Column(String(100), nullable=False)
    first_name = Column(String(50))
    last_name = Column(String(50))
    avatar_url = Column(String(500))
    bio = Column(Text)
    role = Column(String(20), nullable=False, default="student")  # student | instructor | admin
    is_active = Column(Boolean, default=True, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)
    is_online = Column(Boolean, default=False, nullable=False)
    last_login_at = Column(DateTime(timezone=True))

    # Relationships
    owned_classrooms = relationship("Classroom", back_populates="owner")
    memberships = relationship("ClassroomMembership", back_populates="user")
    posts = relationship("Post", back_populates="author")
