# openclass/models/post.py
import json

from sqlalchemy import Column, String, Text, Integer, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from .base import Base


class Post(Base):
    __tablename__ = "posts"

    title = Column(String(200), nullable=False)
    content = Column(Text)
    author_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    # Posts without a classroom belong to the global feed
    classroom_id = Column(String(64), ForeignKey("classrooms.id"), nullable=True, index=True)
    type = Column(String(20), nullable=False, default="document")
    file_url = Column(String(500))
    file_name = Column(String(255))
    file_size = Column(Integer)
    # Ordered list stored as a JSON array
    tags_json = Column("tags", Text, nullable=False, default="[]")
    likes_count = Column(Integer, default=0, nullable=False)
    views_count = Column(Integer, default=0, nullable=False)

    # Relationships
    author = relationship("User", back_populates="posts", lazy="selectin")
    classroom = relationship("Classroom", lazy="selectin")

    __table_args__ = (
        Index("idx_post_classroom_created", "classroom_id", "created_at"),
    )

    @property
    def tags(self) -> list:
        try:
            return json.loads(self.tags_json or "[]")
        except ValueError:
            return []

    @tags.setter
    def tags(self, value):
        self.tags_json = json.dumps(list(value or []), ensure_ascii=False)


class Like(Base):
    __tablename__ = "likes"

    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    post_id = Column(String(64), ForeignKey("posts.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_like_user_post"),
    )

    post = relationship("Post", lazy="selectin")
