class ErrorMessages:
    # Auth
    EMAIL_ALREADY_EXISTS = "A user with this email already exists."
    PASSWORD_MISMATCH = "Passwords do not match."
    INVALID_CREDENTIALS = "Invalid email or password."
    INVALID_AUTHENTICATION = "Invalid or expired access token."
    AUTHENTICATION_REQUIRED = "Authentication required."
    INSUFFICIENT_ROLE = "You do not have permission to perform this action."
    INVALID_REFRESH_TOKEN = "Invalid refresh token."
    EXPIRED_REFRESH_TOKEN = "Refresh token has expired."
    INVALID_RESET_TOKEN = "Invalid or expired password reset token."
    PHONE_FORMAT = "Phone number must contain exactly 11 digits."

    # Users
    USER_NOT_FOUND = "User not found."
    LAST_ADMIN = "The last administrator cannot be removed or demoted."
    CANNOT_DELETE_SELF = "You cannot delete your own account."
    INVALID_ROLE = "Role must be one of: user, moderator, admin."

    # Companies
    COMPANY_NOT_FOUND = "Company not found."
    COMPANY_ALREADY_EXISTS = "A company with this name already exists."
    INVALID_COMPANY_SIZE = "Company size must be one of: small, medium, large, enterprise."
    INVALID_INDUSTRIES = "One or more industries do not exist."
    INVALID_CITY = "City does not exist."

    # Reviews
    REVIEW_NOT_FOUND = "Review not found."
    REVIEW_ALREADY_MODERATED = "Review has already been moderated."
    MODERATION_COMMENT_REQUIRED = "A moderation comment is required to reject a review."
    REVIEW_NOT_APPROVED = "Only approved reviews can be marked as useful."
    USEFUL_MARK_NOT_FOUND = "Review is not marked as useful."
    INVALID_RATING_CATEGORY = "One or more rating categories do not exist."
    INVALID_BENEFIT_TYPE = "One or more benefit types do not exist."
    INVALID_RATING = "Each category rating must be between 1 and 5."
    INVALID_REVIEW_STATUS = "Status must be one of: pending, approved, rejected."

    # Reference data
    CITY_NOT_FOUND = "City not found."
    CITY_ALREADY_EXISTS = "This city already exists in the given country."
    INDUSTRY_NOT_FOUND = "Industry not found."
    INDUSTRY_ALREADY_EXISTS = "An industry with this name already exists."
    INVALID_COLOR = "Color must be a hex value such as #fff or #1a2b3c."
    EMPLOYMENT_TYPE_NOT_FOUND = "Employment type not found."
    EMPLOYMENT_PERIOD_NOT_FOUND = "Employment period not found."
    RATING_CATEGORY_NOT_FOUND = "Rating category not found."
    BENEFIT_TYPE_NOT_FOUND = "Benefit type not found."
    NAME_ALREADY_EXISTS = "An entry with this name already exists."

    # Suggestions
    SUGGESTION_NOT_FOUND = "Suggestion not found."
    INVALID_SUGGESTION_TYPE = "Suggestion type must be one of: company, suggestion."

    # Server
    RATE_LIMIT_EXCEEDED = "Too many requests. Please try again later."
    INTERNAL_ERROR = "Internal server error."


class EntityInUseError(ValueError):
    """Raised when a row cannot be deleted because other rows still reference it."""

    def __init__(self, entity: str, used_by: list[str]):
        self.entity = entity
        self.used_by = used_by
        super().__init__(f"Cannot delete {entity}: it is still used by {', '.join(used_by)}.")
