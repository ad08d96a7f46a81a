from pydantic import BaseModel


class StatisticsResponse(BaseModel):
    users_count: int
    companies_count: int
    reviews_count: int
    pending_reviews: int
    approved_reviews: int
    rejected_reviews: int
    cities_count: int
    industries_count: int
    benefit_types_count: int
    rating_categories_count: int
    employment_types_count: int
    employment_periods_count: int
