import logging

from showbook.core.config import Settings
from showbook.core.exceptions import ResetNotAllowedError
from showbook.scripts.seed_data import seed_shows
from showbook.storage.base import Storage


logger = logging.getLogger(__name__)


class CRUDAdmin:
    async def reset_state(self, storage: Storage, settings: Settings) -> None:
        """Put the catalog back to the seed shows and forget every booking. Test environments only."""
        if not settings.ALLOW_RESET:
            raise ResetNotAllowedError()
        await storage.reset(seed_shows())
        logger.warning("state reset to seed data")


crud_admin = CRUDAdmin()
