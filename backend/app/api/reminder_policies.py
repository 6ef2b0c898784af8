"""Reminder policy endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_reminder_policy import reminder_policy_crud
from backend.app.db.session import get_db
from backend.app.models.reminder_policy import ReminderPolicy
from backend.app.models.user import User
from backend.app.schemas.reminder_policy import ReminderPolicyCreate, ReminderPolicyRead, ReminderPolicyUpdate

router = APIRouter(prefix="/reminder-policies", tags=["reminder_policies"])


def _get_owned_policy(db: Session, policy_id: int, user_id: int) -> ReminderPolicy:
    policy = reminder_policy_crud.get(db, policy_id=policy_id, owner_id=user_id)
    if not policy:
        raise HTTPException(status_code=404, detail="Reminder policy not found")
    return policy


@router.post("/", response_model=ReminderPolicyRead, status_code=201)
async def create_reminder_policy(
    policy_in: ReminderPolicyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return reminder_policy_crud.create(db, obj_in=policy_in, owner_id=current_user.id)


@router.get("/", response_model=list[ReminderPolicyRead])
async def list_reminder_policies(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return reminder_policy_crud.get_multi(db, owner_id=current_user.id)


@router.get("/{policy_id}", response_model=ReminderPolicyRead)
async def get_reminder_policy(policy_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_policy(db, policy_id, current_user.id)


@router.put("/{policy_id}", response_model=ReminderPolicyRead)
async def update_reminder_policy(
    policy_id: int,
    policy_in: ReminderPolicyUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    policy = _get_owned_policy(db, policy_id, current_user.id)
    return reminder_policy_crud.update(db, db_obj=policy, obj_in=policy_in)


@router.delete("/{policy_id}")
async def delete_reminder_policy(policy_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    policy = _get_owned_policy(db, policy_id, current_user.id)
    reminder_policy_crud.delete(db, db_obj=policy)
    return {"status": "deleted", "id": policy_id}
