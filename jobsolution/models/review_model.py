from sqlalchemy import Column, Integer, String, Text, Boolean, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from jobsolution.config.database import Base
from jobsolution.utils.time_util import utcnow

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
REVIEW_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(String(100), nullable=False)
    employment_type_id = Column(Integer, ForeignKey("employment_types.id"), nullable=True)
    employment_period_id = Column(Integer, ForeignKey("employment_periods.id"), nullable=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True)
    rating = Column(Float, nullable=False)
    pros = Column(Text, nullable=False)
    cons = Column(Text, nullable=False)
    is_former_employee = Column(Boolean, nullable=False, default=False)
    is_recommended = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default=STATUS_PENDING, index=True)
    moderation_comment = Column(Text, nullable=True)
    useful_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    approved_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="reviews")
    company = relationship("Company", back_populates="reviews")
    city = relationship("City")
    employment_type = relationship("EmploymentType")
    employment_period = relationship("EmploymentPeriod")
    category_ratings = relationship("ReviewCategoryRating", back_populates="review", cascade="all, delete-orphan")
    benefits = relationship("ReviewBenefit", back_populates="review", cascade="all, delete-orphan")
    useful_marks = relationship("UsefulMark", back_populates="review", cascade="all, delete-orphan")


class ReviewCategoryRating(Base):
    __tablename__ = "review_category_ratings"

    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Integer, ForeignKey("rating_categories.id"), primary_key=True)
    rating = Column(Float, nullable=False)

    review = relationship("Review", back_populates="category_ratings")
    category = relationship("RatingCategory")


class ReviewBenefit(Base):
    __tablename__ = "review_benefits"
    __table_args__ = (UniqueConstraint("review_id", "benefit_type_id", name="uq_review_benefits"),)

    id = Column(Integer, primary_key=True, index=True)
    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False)
    benefit_type_id = Column(Integer, ForeignKey("benefit_types.id"), nullable=False)

    review = relationship("Review", back_populates="benefits")
    benefit_type = relationship("BenefitType")


class UsefulMark(Base):
    __tablename__ = "useful_marks"
    __table_args__ = (UniqueConstraint("user_id", "review_id", name="uq_useful_marks_user_review"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="useful_marks")
    review = relationship("Review", back_populates="useful_marks")
