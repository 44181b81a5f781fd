# cinema_brew/features/auth/service.py
from typing import Optional

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cinema_brew.config import config
from cinema_brew.db import User
from cinema_brew.logger import get_logger
from .schemas import Credentials, UserOut

log = get_logger(__name__)


class UsernameTakenError(Exception):
    pass


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=config.bcrypt_rounds))
    return hashed.decode("utf-8")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # stored value isn't a bcrypt hash
        return False


def signup(db: Session, creds: Credentials) -> UserOut:
    user = User(username=creds.username, password=hash_password(creds.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise UsernameTakenError(creds.username) from e
    db.refresh(user)
    log.info(f"New user signed up: {user.username} (id={user.id})")
    return UserOut(id=user.id, username=user.username)

def login(db: Session, creds: Credentials) -> Optional[UserOut]:
    user = db.execute(select(User).where(User.username == creds.username)).scalar_one_or_none()
    if user and verify_password(creds.password, user.password):
        return UserOut(id=user.id, username=user.username)
    return None
