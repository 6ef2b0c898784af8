"""Account-level endpoints for the signed-in tenant."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.services.data_export import export_user_data

router = APIRouter(prefix="/auth", tags=["auth"])

EXPORT_FILENAME = "my-data.json"


@router.get("/download-data")
def download_my_data(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    export = export_user_data(db, current_user)
    return JSONResponse(
        content=export.model_dump(mode="json"),
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
