# openclass/models/file.py
from sqlalchemy import Column, String, Text, Integer, ForeignKey
from .base import Base


class File(Base):
    __tablename__ = "files"

    title = Column(String(100), nullable=False)
    description = Column(Text)
    file_name = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    mime_type = Column(String(100))
    size = Column(Integer, nullable=False, default=0)
    url = Column(String(500), nullable=False)
    public_id = Column(String(255), unique=True, nullable=False, index=True)
    format = Column(String(20))
    type = Column(String(20), nullable=False, default="OTHER")
    category_id = Column(String(64), ForeignKey("categories.id"), nullable=True)
    tags = Column(Text, nullable=False, default="[]")
    uploaded_by_id = Column(String(64), ForeignKey("users.id"), nullable=True, index=True)
    views_count = Column(Integer, default=0, nullable=False)
