from typing import Optional
from sqlalchemy.orm import Session
from jobsolution.models.suggestion_model import Suggestion


def create_suggestion(db: Session, type: str, text: str) -> Suggestion:
    suggestion = Suggestion(type=type, text=text)
    db.add(suggestion)
    db.flush()
    return suggestion


def get_suggestion_by_id(db: Session, suggestion_id: int) -> Optional[Suggestion]:
    return db.query(Suggestion).filter(Suggestion.id == suggestion_id).first()


def list_suggestions_query(db: Session, type: Optional[str] = None, sort_order: str = "desc"):
    query = db.query(Suggestion)
    if type:
        query = query.filter(Suggestion.type == type)
    if sort_order == "asc":
        return query.order_by(Suggestion.created_at.asc(), Suggestion.id.asc())
    return query.order_by(Suggestion.created_at.desc(), Suggestion.id.desc())


def delete_suggestion(db: Session, suggestion: Suggestion) -> None:
    db.delete(suggestion)
    db.flush()
