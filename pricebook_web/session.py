"""
Admin session flag kept in per-browser persistent storage.

This is a convenience switch for the admin screens, not access control.
"""

import logging
import secrets
from typing import MutableMapping, Optional

from pricebook_web.config import settings

logger = logging.getLogger(__name__)

AUTH_KEY = "pricebook_admin_auth"


class AdminSession:
    def __init__(self, storage: MutableMapping, password: Optional[str] = None):
        self.storage = storage
        self.password = settings.ADMIN_PASSWORD if password is None else password

    def load(self) -> bool:
        return self.storage.get(AUTH_KEY) == "true"

    def set(self, active: bool) -> None:
        if active:
            self.storage[AUTH_KEY] = "true"
        else:
            self.clear()

    def clear(self) -> None:
        self.storage.pop(AUTH_KEY, None)

    @property
    def is_admin(self) -> bool:
        return self.load()

    def login(self, password: str) -> bool:
        """Activates the admin flag when the shared password matches."""
        if secrets.compare_digest(password.encode("utf-8"), self.password.encode("utf-8")):
            self.set(True)
            logger.info("Admin session started")
            return True
        logger.warning("Rejected admin login attempt")
        return False

    def logout(self) -> None:
        self.clear()
        logger.info("Admin session ended")
