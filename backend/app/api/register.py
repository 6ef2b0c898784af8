"""Tenant sign-up. Every registered user owns an isolated set of billing records."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_tenant(user_in: UserCreate, db: Session = Depends(get_db)):
    if db.query(User.id).filter(User.email == user_in.email).first() is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    tenant = User(email=user_in.email, name=user_in.name, hashed_password=get_password_hash(user_in.password))
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    logger.info("Registered tenant %s", tenant.id)
    return tenant
