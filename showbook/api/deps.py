from fastapi import Request

from showbook.core.config import Settings
from showbook.crud.booking import CRUDBooking


async def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with, not the module-level defaults."""
    return request.app.state.settings


async def get_allocator(request: Request) -> CRUDBooking:
    return request.app.state.allocator
