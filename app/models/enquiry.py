from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from app.database.connection import Base

ENQUIRY_STATUSES = ("new", "reviewed", "in_progress", "closed")


class Enquiry(Base):
    __tablename__ = "enquiries"
    
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=False)
    message = Column(String, nullable=False)
    property_id = Column(String, ForeignKey("properties.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(String, nullable=False, default="new", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    __table_args__ = (
        Index('idx_enquiry_status_created', 'status', 'created_at'),
    )
