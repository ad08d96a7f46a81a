from sqlalchemy import Column, Integer, String, Text, DateTime
from jobsolution.config.database import Base
from jobsolution.utils.time_util import utcnow

SUGGESTION_TYPES = ("company", "suggestion")


class Suggestion(Base):
    __tablename__ = "suggestions"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
