"""Repository for profile rows."""

from __future__ import annotations

from typing import Any

from frontend.gateway import Gateway, eq
from frontend.models.user import User
from state.types import now_iso

TABLE = "tbluser"


def _row_to_user(row: dict[str, Any]) -> dict[str, Any]:
    """Convert a profile row to User fields."""
    return User(
        id=str(row["userID"]),
        name=row.get("name") or "",
        email=row.get("email") or "",
        image=row.get("image"),
        created_at=row.get("create_timestamp"),
    ).model_dump()


class UserRepo:
    """All profile-related gateway operations."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def get(self, user_id: str) -> dict[str, Any] | None:
        """
        Get a profile by its auth identity id.

        Returns:
            User fields if found, None otherwise
        """
        result = await self.gateway.select(TABLE, filters=[eq("userID", user_id)], maybe_single=True)
        return _row_to_user(result.data) if result.data else None

    async def email_taken(self, email: str) -> bool:
        result = await self.gateway.select(TABLE, "userID", filters=[eq("email", email)], row_range=(0, 0))
        return bool(result.rows)

    async def create(self, user_id: str, name: str, email: str, image: str | None = None) -> dict[str, Any]:
        """
        Insert the profile row for a freshly signed-up identity.

        Args:
            user_id: Auth identity id the profile is keyed to
            name: Display name
            email: Email address
            image: Optional avatar as an inline data URL

        Returns:
            User fields of the inserted row
        """
        result = await self.gateway.insert(
            TABLE,
            {
                "userID": user_id,
                "name": name,
                "email": email,
                "image": image,
                "create_timestamp": now_iso(),
            },
            single=True,
        )
        return _row_to_user(result.data)

    async def get_author(self, user_id: str) -> tuple[str | None, str | None]:
        """Display name and avatar of a blog author, (None, None) if unknown."""
        result = await self.gateway.select(
            TABLE,
            "name,image",
            filters=[eq("userID", user_id)],
            maybe_single=True,
        )
        if not result.data:
            return None, None
        return result.data.get("name"), result.data.get("image")
