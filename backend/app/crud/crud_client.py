"""CRUD operations for clients."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.client import Client
from backend.app.schemas.client import ClientCreate, ClientUpdate


class CRUDClient:
    def create(self, db: Session, *, obj_in: ClientCreate, owner_id: int) -> Client:
        obj = Client(owner_id=owner_id, **obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, client_id: int, owner_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id, Client.owner_id == owner_id).first()

    def get_multi(self, db: Session, *, owner_id: int) -> List[Client]:
        return (
            db.query(Client)
            .filter(Client.owner_id == owner_id)
            .order_by(Client.created_at.desc(), Client.id.desc())
            .all()
        )

    def update(self, db: Session, *, db_obj: Client, obj_in: ClientUpdate) -> Client:
        for field, value in obj_in.model_dump().items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: Client) -> Client:
        db.delete(db_obj)
        db.commit()
        return db_obj


client_crud = CRUDClient()
