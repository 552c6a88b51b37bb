from fastapi import APIRouter, Depends

from showbook.api.deps import get_app_settings
from showbook.core.config import Settings
from showbook.crud.admin import crud_admin
from showbook.storage import Storage, get_storage


router = APIRouter(tags=["admin"])


@router.post("/reset", summary="Restore the seed shows and drop all bookings",
             description="Meant for test environments; disabled when ALLOW_RESET is false.")
async def reset_state(
        storage: Storage = Depends(get_storage),
        settings: Settings = Depends(get_app_settings)):
    await crud_admin.reset_state(storage, settings)
    return {"ok": True}
