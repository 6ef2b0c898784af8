"""CRUD operations for reminder policies."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.reminder_policy import ReminderPolicy
from backend.app.schemas.reminder_policy import ReminderPolicyCreate, ReminderPolicyUpdate


class CRUDReminderPolicy:
    def create(self, db: Session, *, obj_in: ReminderPolicyCreate, owner_id: int) -> ReminderPolicy:
        obj = ReminderPolicy(owner_id=owner_id, **obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, policy_id: int, owner_id: int) -> Optional[ReminderPolicy]:
        return (
            db.query(ReminderPolicy)
            .filter(ReminderPolicy.id == policy_id, ReminderPolicy.owner_id == owner_id)
            .first()
        )

    def get_multi(self, db: Session, *, owner_id: int) -> List[ReminderPolicy]:
        return (
            db.query(ReminderPolicy)
            .filter(ReminderPolicy.owner_id == owner_id)
            .order_by(ReminderPolicy.created_at.desc(), ReminderPolicy.id.desc())
            .all()
        )

    def get_active(self, db: Session) -> List[ReminderPolicy]:
        return db.query(ReminderPolicy).filter(ReminderPolicy.is_active.is_(True)).order_by(ReminderPolicy.id.asc()).all()

    def update(self, db: Session, *, db_obj: ReminderPolicy, obj_in: ReminderPolicyUpdate) -> ReminderPolicy:
        for field, value in obj_in.model_dump().items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: ReminderPolicy) -> ReminderPolicy:
        db.delete(db_obj)
        db.commit()
        return db_obj


reminder_policy_crud = CRUDReminderPolicy()
