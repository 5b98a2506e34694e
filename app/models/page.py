from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from app.database.connection import Base


class Page(Base):
    __tablename__ = "pages"
    
    id = Column(String, primary_key=True)
    slug = Column(String, unique=True, nullable=False, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")
    meta_title = Column(String, nullable=True)
    meta_description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
