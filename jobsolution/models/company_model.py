from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from jobsolution.config.database import Base
from jobsolution.models.industry_model import company_industries
from jobsolution.utils.time_util import utcnow

COMPANY_SIZES = {
    "small": "up to 50 employees",
    "medium": "50-200 employees",
    "large": "200-1000 employees",
    "enterprise": "more than 1000 employees",
}


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, index=True, nullable=False)
    slug = Column(String(300), unique=True, index=True, nullable=False)
    size = Column(String(20), nullable=False)
    logo = Column(String(500), nullable=True)
    website = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True)
    reviews_count = Column(Integer, nullable=False, default=0)
    average_rating = Column(Float, nullable=False, default=0)
    recommendation_percentage = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    city = relationship("City")
    industries = relationship("Industry", secondary=company_industries, back_populates="companies", order_by="Industry.name")
    reviews = relationship("Review", back_populates="company", cascade="all, delete-orphan")
    category_ratings = relationship("CompanyCategoryRating", back_populates="company", cascade="all, delete-orphan")


class CompanyCategoryRating(Base):
    __tablename__ = "company_category_ratings"

    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Integer, ForeignKey("rating_categories.id"), primary_key=True)
    rating = Column(Float, nullable=False, default=0)

    company = relationship("Company", back_populates="category_ratings")
    category = relationship("RatingCategory")
