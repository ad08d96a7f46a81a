from fastapi import APIRouter
from jobsolution.routers import (
    auth_router,
    user_router,
    company_router,
    review_router,
    city_router,
    industry_router,
    lookup_router,
    suggestion_router,
    admin_router,
)

api_router = APIRouter()

api_router.include_router(auth_router.router)
api_router.include_router(user_router.router)
api_router.include_router(company_router.router)
api_router.include_router(review_router.router)
api_router.include_router(city_router.router)
api_router.include_router(industry_router.router)
for router in lookup_router.routers:
    api_router.include_router(router)
api_router.include_router(suggestion_router.router)
api_router.include_router(admin_router.router)
