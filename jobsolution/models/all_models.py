# Importing this module registers every table on Base.metadata
from jobsolution.models.user_model import User, RefreshToken, PasswordResetToken
from jobsolution.models.city_model import City
from jobsolution.models.industry_model import Industry, company_industries
from jobsolution.models.lookup_model import RatingCategory, BenefitType, EmploymentType, EmploymentPeriod
from jobsolution.models.company_model import Company, CompanyCategoryRating
from jobsolution.models.review_model import Review, ReviewCategoryRating, ReviewBenefit, UsefulMark
from jobsolution.models.suggestion_model import Suggestion

__all__ = [
    "User",
    "RefreshToken",
    "PasswordResetToken",
    "City",
    "Industry",
    "company_industries",
    "RatingCategory",
    "BenefitType",
    "EmploymentType",
    "EmploymentPeriod",
    "Company",
    "CompanyCategoryRating",
    "Review",
    "ReviewCategoryRating",
    "ReviewBenefit",
    "UsefulMark",
    "Suggestion",
]
