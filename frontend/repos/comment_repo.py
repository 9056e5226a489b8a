"""Repository for comment rows and the joined comment view."""

from __future__ import annotations

from typing import Any

from frontend.gateway import Gateway, Order, eq

TABLE = "tblcomment"
DETAILS_VIEW = "vw_comment_details"


def _row_to_comment(row: dict[str, Any]) -> dict[str, Any]:
    """Convert a view row to Comment fields. Author fields come from the join."""
    return {
        "id": str(row["commentID"]),
        "blog_id": str(row["blogID"]),
        "user_id": str(row["userID"]),
        "content": row.get("content") or "",
        "image": row.get("image"),
        "created_at": row.get("created_at"),
        "author_name": row.get("authorName"),
        "author_avatar": row.get("authorAvatar"),
    }


class CommentRepo:
    """All comment-related gateway operations."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def create(self, blog_id: str, user_id: str, content: str, image: str | None) -> str:
        """
        Insert a comment row.

        Returns:
            The new comment id. The insert does not return author fields;
            read them back with get_detail().
        """
        result = await self.gateway.insert(
            TABLE,
            {"blogID": blog_id, "userID": user_id, "content": content, "image": image},
            single=True,
        )
        return str(result.data["commentID"])

    async def get_owner(self, comment_id: str) -> str | None:
        """Author id of a comment as stored on the backend, None if absent."""
        result = await self.gateway.select(
            TABLE,
            "commentID,userID",
            filters=[eq("commentID", comment_id)],
            maybe_single=True,
        )
        return str(result.data["userID"]) if result.data else None

    async def get_detail(self, comment_id: str) -> dict[str, Any]:
        """
        Read one comment through the joined view.

        Raises:
            NoSingleRowError: If the comment is not visible
        """
        result = await self.gateway.select(DETAILS_VIEW, filters=[eq("commentID", comment_id)], single=True)
        return _row_to_comment(result.data)

    async def get_detail_or_none(self, comment_id: str) -> dict[str, Any] | None:
        result = await self.gateway.select(DETAILS_VIEW, filters=[eq("commentID", comment_id)], maybe_single=True)
        return _row_to_comment(result.data) if result.data else None

    async def list_for_blog(self, blog_id: str) -> list[dict[str, Any]]:
        result = await self.gateway.select(
            DETAILS_VIEW,
            filters=[eq("blogID", blog_id)],
            order=Order("created_at"),
        )
        return [_row_to_comment(r) for r in result.rows]

    async def update(self, comment_id: str, user_id: str, values: dict[str, Any]) -> int:
        """
        Update a comment the given user owns.

        The owner filter travels with the request so the backend enforces it;
        rows of other users are never matched.

        Returns:
            Number of rows updated
        """
        result = await self.gateway.update(
            TABLE,
            values,
            filters=[eq("commentID", comment_id), eq("userID", user_id)],
        )
        return len(result.rows)

    async def delete(self, comment_id: str, user_id: str) -> int:
        """Delete a comment the given user owns. Returns rows deleted."""
        result = await self.gateway.delete(
            TABLE,
            filters=[eq("commentID", comment_id), eq("userID", user_id)],
        )
        return len(result.rows)

    async def delete_for_blog(self, blog_id: str) -> int:
        result = await self.gateway.delete(TABLE, filters=[eq("blogID", blog_id)])
        return len(result.rows)
