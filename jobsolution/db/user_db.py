from typing import Optional
from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.orm import Session
from jobsolution.config.config import settings
from jobsolution.models.user_model import User, ROLE_ADMIN, ROLE_USER

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def create_user(
    db: Session,
    email: str,
    password: str,
    phone: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    role: str = ROLE_USER,
) -> User:
    db_user = User(
        email=email.lower(),
        password_hash=hash_password(password),
        phone=phone,
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    db.add(db_user)
    db.flush()
    return db_user


def list_users_query(db: Session, search: Optional[str] = None, role: Optional[str] = None):
    query = db.query(User)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(User.email.ilike(pattern), User.first_name.ilike(pattern), User.last_name.ilike(pattern)))
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.created_at.desc(), User.id.desc())


def count_admins(db: Session) -> int:
    return db.query(User).filter(User.role == ROLE_ADMIN).count()


def delete_user(db: Session, user: User) -> None:
    db.delete(user)
    db.flush()
