# storagehub/dependencies.py
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from storagehub.core.config import Settings, get_settings
from storagehub.models.database import get_db
from storagehub.services.object_store import ObjectStore, get_object_store
from storagehub.services.orchestrator import UploadOrchestrator


# --- helper: get current logged in user id from cookie ---
def get_current_user_id(request: Request) -> str:
    # the session cookie is issued by the auth service in front of us
    user_id = request.cookies.get("user_id")
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user_id.strip()


def get_orchestrator(
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
    settings: Settings = Depends(get_settings),
) -> UploadOrchestrator:
    return UploadOrchestrator(db, store, settings)
