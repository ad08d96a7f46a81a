from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from jobsolution.config.database import get_db
from jobsolution.config.errors import EntityInUseError
from jobsolution.models.user_model import User, ROLE_ADMIN, ROLE_MODERATOR
from jobsolution.models.review_model import STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED
from jobsolution.schemas.admin_schema import StatisticsResponse
from jobsolution.schemas.city_schema import CityCreate, CityResponse
from jobsolution.schemas.common_schema import MessageResponse
from jobsolution.schemas.company_schema import CompanyCreate, CompanyResponse
from jobsolution.schemas.industry_schema import IndustryCreate, IndustryResponse
from jobsolution.schemas.lookup_schema import LookupCreate, LookupResponse
from jobsolution.schemas.review_schema import ReviewUpdate, ReviewResponse, ReviewListResponse, ModerationRequest
from jobsolution.schemas.user_schema import UserResponse, UserListResponse, RoleUpdate
from jobsolution.services.auth_service import require_roles
from jobsolution.services import admin_service, company_service, city_service, industry_service, lookup_service
from jobsolution.services import review_service
from jobsolution.routers.lookup_router import LOOKUP_RESOURCES

router = APIRouter(prefix="/admin", tags=["admin"])

admin_only = require_roles(ROLE_ADMIN)
moderators = require_roles(ROLE_MODERATOR, ROLE_ADMIN)


def conflict(e: EntityInUseError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get(
    "/statistics",
    response_model=StatisticsResponse,
    summary="Platform statistics",
    description="Row counts for users, companies, reviews by status and every reference table."
)
def statistics(db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    return admin_service.get_statistics(db)


# --------------------------------------------------------------------------
# Companies
# --------------------------------------------------------------------------
@router.post("/companies", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED, summary="Create company")
def create_company(data: CompanyCreate, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    return company_service.create_company(db, data)


@router.put("/companies/{company_id}", response_model=CompanyResponse, summary="Update company")
def update_company(
    company_id: int,
    data: CompanyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    return company_service.update_company(db, company_id, data)


@router.delete(
    "/companies/{company_id}",
    response_model=MessageResponse,
    summary="Delete company",
    description="Deletes the company together with its reviews."
)
def delete_company(company_id: int, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    return company_service.delete_company(db, company_id)


# --------------------------------------------------------------------------
# Users
# --------------------------------------------------------------------------
@router.get("/users", response_model=UserListResponse, summary="List users")
def users(
    search: Optional[str] = Query(None),
    role: Optional[str] = Query(None, pattern="^(user|moderator|admin)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    return admin_service.list_users(db, page, limit, search=search, role=role)


@router.get("/users/{user_id}", response_model=UserResponse, summary="Get user")
def user_detail(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    return admin_service.get_user(db, user_id)


@router.put(
    "/users/{user_id}/role",
    response_model=UserResponse,
    summary="Change user role",
    description="The last remaining admin cannot be demoted."
)
def change_role(
    user_id: int,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    return admin_service.update_user_role(db, current_user, user_id, data.role)


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
    description="""
    Deletes a user with their reviews and tokens.
    Admins cannot delete themselves and the last admin cannot be deleted.
    """
)
def delete_user(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    return admin_service.delete_user(db, current_user, user_id)


# --------------------------------------------------------------------------
# Reviews
# --------------------------------------------------------------------------
def moderation_list(review_status: str):
    def list_reviews(
        company_id: Optional[int] = Query(None, ge=1),
        sort_order: str = Query("asc", pattern="^(asc|desc)$"),
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
        db: Session = Depends(get_db),
        current_user: User = Depends(moderators),
    ):
        return review_service.list_reviews_by_status(db, review_status, page, limit, company_id, sort_order)

    return list_reviews


for review_status in (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED):
    router.add_api_route(
        f"/reviews/moderation/{review_status}",
        moderation_list(review_status),
        methods=["GET"],
        response_model=ReviewListResponse,
        summary=f"List {review_status} reviews",
    )


@router.put(
    "/reviews/{review_id}/approve",
    response_model=ReviewResponse,
    summary="Approve review",
    description="""
    Publishes a pending review and recomputes the company ratings.
    Reviews that were already moderated cannot be approved again.
    """
)
def approve_review(
    review_id: int,
    data: Optional[ModerationRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(moderators),
):
    comment = data.moderation_comment if data else None
    return review_service.approve_review(db, current_user, review_id, comment)


@router.put(
    "/reviews/{review_id}/reject",
    response_model=ReviewResponse,
    summary="Reject review",
    description="Rejects a pending review. A moderation comment is required."
)
def reject_review(
    review_id: int,
    data: ModerationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(moderators),
):
    return review_service.reject_review(db, current_user, review_id, data.moderation_comment)


@router.put("/reviews/{review_id}", response_model=ReviewResponse, summary="Edit review")
def update_review(
    review_id: int,
    data: ReviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    return review_service.admin_update_review(db, current_user, review_id, data)


@router.delete("/reviews/{review_id}", response_model=MessageResponse, summary="Delete review")
def delete_review(review_id: int, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    return review_service.admin_delete_review(db, current_user, review_id)


# --------------------------------------------------------------------------
# Cities
# --------------------------------------------------------------------------
@router.post("/cities", response_model=CityResponse, status_code=status.HTTP_201_CREATED, summary="Create city")
def create_city(data: CityCreate, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    return city_service.create_city(db, data)


@router.put("/cities/{city_id}", response_model=CityResponse, summary="Update city")
def update_city(city_id: int, data: CityCreate, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    return city_service.update_city(db, city_id, data)


@router.delete("/cities/{city_id}", response_model=MessageResponse, summary="Delete city")
def delete_city(city_id: int, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    try:
        return city_service.delete_city(db, city_id)
    except EntityInUseError as e:
        raise conflict(e)


# --------------------------------------------------------------------------
# Industries
# --------------------------------------------------------------------------
@router.post("/industries", response_model=IndustryResponse, status_code=status.HTTP_201_CREATED, summary="Create industry")
def create_industry(data: IndustryCreate, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    return industry_service.create_industry(db, data)


@router.put("/industries/{industry_id}", response_model=IndustryResponse, summary="Update industry")
def update_industry(
    industry_id: int,
    data: IndustryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    return industry_service.update_industry(db, industry_id, data)


@router.delete("/industries/{industry_id}", response_model=MessageResponse, summary="Delete industry")
def delete_industry(industry_id: int, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    try:
        return industry_service.delete_industry(db, industry_id)
    except EntityInUseError as e:
        raise conflict(e)


# --------------------------------------------------------------------------
# Rating categories, benefit types, employment types and periods
# --------------------------------------------------------------------------
def add_lookup_routes(prefix: str, model, tag: str):
    def create_entry(data: LookupCreate, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
        return lookup_service.create_entry(db, model, data)

    def update_entry(
        entity_id: int,
        data: LookupCreate,
        db: Session = Depends(get_db),
        current_user: User = Depends(admin_only),
    ):
        return lookup_service.update_entry(db, model, entity_id, data)

    def delete_entry(entity_id: int, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
        try:
            return lookup_service.delete_entry(db, model, entity_id)
        except EntityInUseError as e:
            raise conflict(e)

    router.add_api_route(
        prefix, create_entry, methods=["POST"], response_model=LookupResponse,
        status_code=status.HTTP_201_CREATED, summary=f"Create {tag} entry",
    )
    router.add_api_route(
        f"{prefix}/{{entity_id}}", update_entry, methods=["PUT"], response_model=LookupResponse,
        summary=f"Update {tag} entry",
    )
    router.add_api_route(
        f"{prefix}/{{entity_id}}", delete_entry, methods=["DELETE"], response_model=MessageResponse,
        summary=f"Delete {tag} entry",
    )


for lookup_prefix, lookup_model, lookup_tag in LOOKUP_RESOURCES:
    add_lookup_routes(lookup_prefix, lookup_model, lookup_tag)
