"""Client endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_client import client_crud
from backend.app.db.session import get_db
from backend.app.models.client import Client
from backend.app.models.user import User
from backend.app.schemas.client import ClientCreate, ClientRead, ClientUpdate

router = APIRouter(prefix="/clients", tags=["clients"])


def _get_owned_client(db: Session, client_id: int, owner_id: int) -> Client:
    client = client_crud.get(db, client_id=client_id, owner_id=owner_id)
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client


@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_in: ClientCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return client_crud.create(db, obj_in=client_in, owner_id=current_user.id)


@router.get("/", response_model=list[ClientRead])
async def list_clients(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return client_crud.get_multi(db, owner_id=current_user.id)


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(client_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_client(db, client_id, current_user.id)


@router.put("/{client_id}", response_model=ClientRead)
async def update_client(
    client_id: int,
    client_in: ClientUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    client = _get_owned_client(db, client_id, current_user.id)
    return client_crud.update(db, db_obj=client, obj_in=client_in)


@router.delete("/{client_id}")
async def delete_client(client_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    client = _get_owned_client(db, client_id, current_user.id)
    client_crud.delete(db, db_obj=client)
    return {"status": "deleted", "id": client_id}
