"""Process-local storage of authenticated StreamMe users."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from streamme_client.models.user import StreamMeProfile, UserId, UserRecord

logger = logging.getLogger(__name__)


class UserStore:
    """Volatile mapping of StreamMe user id to :class:`UserRecord`.

    Records live until they are deleted or the process exits. A later login by
    the same user replaces the stored record rather than merging into it.
    """

    def __init__(self) -> None:
        self._users: Dict[UserId, UserRecord] = {}

    def save(
        self,
        access_token: str,
        refresh_token: Optional[str],
        profile: StreamMeProfile,
    ) -> Optional[UserRecord]:
        """Store tokens and profile fields; returns ``None`` when the profile has no id."""
        if profile.id is None or profile.id == "":
            logger.warning("Refusing to store user without a profile id.")
            return None

        record = UserRecord(
            id=profile.id,
            username=profile.username,
            slug=profile.slug,
            access_token=access_token,
            refresh_token=refresh_token,
        )
        self._users[record.id] = record
        return record

    def get(self, user_id: UserId) -> Optional[UserRecord]:
        return self._users.get(user_id)

    def delete(self, user_id: UserId) -> None:
        self._users.pop(user_id, None)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __len__(self) -> int:
        return len(self._users)


__all__ = ["UserStore"]
