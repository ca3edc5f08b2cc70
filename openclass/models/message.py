# openclass/models/message.py
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from .base import Base


class Message(Base):
    __tablename__ = "messages"

    content = Column(Text, nullable=False)
    author_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    classroom_id = Column(String(64), ForeignKey("classrooms.id"), nullable=False, index=True)
    type = Column(String(10), nullable=False, default="text")
    file_url = Column(String(500))
    file_name = Column(String(255))
    file_size = Column(Integer)
    is_edited = Column(Boolean, default=False, nullable=False)
    edited_at = Column(DateTime(timezone=True))
    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(DateTime(timezone=True))
    reply_to_id = Column(String(64), ForeignKey("messages.id"), nullable=True)

    # Relationships
    author = relationship("User", lazy="selectin")
    reply_to = relationship("Message", remote_side="Message.id", lazy="selectin", join_depth=1)
    reactions = relationship("MessageReaction", back_populates="message", lazy="selectin")

    # Index for efficient history queries
    __table_args__ = (
        Index("idx_message_classroom_time", "classroom_id", "created_at"),
    )


class MessageRead(Base):
    __tablename__ = "message_reads"

    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    message_id = Column(String(64), ForeignKey("messages.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "message_id", name="uq_message_read_user_message"),
    )


class MessageReaction(Base):
    __tablename__ = "message_reactions"

    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    message_id = Column(String(64), ForeignKey("messages.id"), nullable=False, index=True)
    emoji = Column(String(32), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "message_id", "emoji", name="uq_message_reaction"),
    )

    message = relationship("Message", back_populates="reactions")
