"""User preferences endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_user_preferences import user_preferences_crud
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.user_preferences import UserPreferencesRead, UserPreferencesUpdate

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/me", response_model=UserPreferencesRead)
async def get_my_preferences(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return user_preferences_crud.get_or_create(db, user_id=current_user.id)


@router.put("/me", response_model=UserPreferencesRead)
async def update_my_preferences(
    update: UserPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    prefs = user_preferences_crud.get_or_create(db, user_id=current_user.id)
    return user_preferences_crud.update(db, db_obj=prefs, obj_in=update)
