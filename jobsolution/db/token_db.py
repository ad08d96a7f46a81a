from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from jobsolution.models.user_model import RefreshToken, PasswordResetToken


# Refresh tokens
def create_refresh_token(db: Session, user_id: int, token: str, expires_at: datetime) -> RefreshToken:
    db_token = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
    db.add(db_token)
    db.flush()
    return db_token


def get_refresh_token(db: Session, token: str) -> Optional[RefreshToken]:
    return db.query(RefreshToken).filter(RefreshToken.token == token).first()


def delete_refresh_token(db: Session, token: str) -> bool:
    deleted = db.query(RefreshToken).filter(RefreshToken.token == token).delete(synchronize_session=False)
    return deleted > 0


def delete_user_refresh_tokens(db: Session, user_id: int) -> int:
    return db.query(RefreshToken).filter(RefreshToken.user_id == user_id).delete(synchronize_session=False)


# Password reset tokens
def create_reset_token(db: Session, user_id: int, token: str, expires_at: datetime) -> PasswordResetToken:
    db_token = PasswordResetToken(user_id=user_id, token=token, expires_at=expires_at)
    db.add(db_token)
    db.flush()
    return db_token


def get_reset_token(db: Session, token: str) -> Optional[PasswordResetToken]:
    return db.query(PasswordResetToken).filter(PasswordResetToken.token == token).first()


def delete_user_reset_tokens(db: Session, user_id: int) -> int:
    return db.query(PasswordResetToken).filter(PasswordResetToken.user_id == user_id).delete(synchronize_session=False)
