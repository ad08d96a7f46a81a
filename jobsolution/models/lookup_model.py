from sqlalchemy import Column, Integer, String
from jobsolution.config.database import Base


class LookupMixin:
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(String(255), nullable=True)


class RatingCategory(LookupMixin, Base):
    __tablename__ = "rating_categories"


class BenefitType(LookupMixin, Base):
    __tablename__ = "benefit_types"


class EmploymentType(LookupMixin, Base):
    __tablename__ = "employment_types"


class EmploymentPeriod(LookupMixin, Base):
    __tablename__ = "employment_periods"
