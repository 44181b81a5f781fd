# cinema_brew/features/auth/router.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from cinema_brew.db import get_db
from .schemas import Credentials, UserOut
from .service import UsernameTakenError, login, signup

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

@router.post("/signup", response_model=UserOut)
async def signup_endpoint(creds: Credentials, db: Session = Depends(get_db)) -> UserOut:
    try:
        return signup(db, creds)
    except UsernameTakenError:
        raise HTTPException(status_code=400, detail="Username already exists")

@router.post("/login", response_model=UserOut)
async def login_endpoint(creds: Credentials, db: Session = Depends(get_db)) -> UserOut:
    user = login(db, creds)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return user
