from sqlalchemy import Column, String, Integer, Float, Numeric, Boolean, JSON, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from app.database.connection import Base

PROPERTY_STATUSES = ("draft", "pending", "approved", "rejected")
PUBLIC_STATUS = "approved"


class Property(Base):
    __tablename__ = "properties"
    
    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)  # Lower-case, globally unique
    price = Column(Numeric(14, 2), nullable=False)
    property_type = Column(String, nullable=False, index=True)  # Indexed for filtering
    status = Column(String, nullable=False, default="draft", index=True)
    location = Column(String, nullable=False)
    city = Column(String, nullable=True, index=True)  # Indexed for filtering
    area = Column(Float, nullable=True)
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    features = Column(JSON, nullable=False, default=list)
    description = Column(String, nullable=True)
    images = Column(JSON, nullable=False, default=list)  # Image URLs
    cover_image = Column(String, nullable=True)
    premium = Column(Boolean, nullable=False, default=False)
    owner_contact = Column(String, nullable=False)
    created_by = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # Composite indexes for common query patterns
    __table_args__ = (
        Index('idx_property_status_created', 'status', 'created_at'),
        Index('idx_property_status_city', 'status', 'city'),
    )
