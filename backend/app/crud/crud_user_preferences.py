"""CRUD operations for user preferences; one row per user, created on first access."""

from typing import Optional

from sqlalchemy.orm import Session

from backend.app.models.user_preferences import UserPreferences
from backend.app.schemas.user_preferences import UserPreferencesUpdate


class CRUDUserPreferences:
    def get(self, db: Session, *, user_id: int) -> Optional[UserPreferences]:
        return db.query(UserPreferences).filter(UserPreferences.user_id == user_id).first()

    def get_or_create(self, db: Session, *, user_id: int) -> UserPreferences:
        prefs = self.get(db, user_id=user_id)
        if prefs:
            return prefs
        prefs = UserPreferences(user_id=user_id)
        db.add(prefs)
        db.commit()
        db.refresh(prefs)
        return prefs

    def update(self, db: Session, *, db_obj: UserPreferences, obj_in: UserPreferencesUpdate) -> UserPreferences:
        for field, value in obj_in.model_dump().items():
            if value is not None:
                setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj


user_preferences_crud = CRUDUserPreferences()
