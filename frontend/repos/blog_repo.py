"""Repository for blog rows."""

from __future__ import annotations

from typing import Any

from frontend.gateway import Gateway, Order, eq, page_range

TABLE = "tblBlog"
COLUMNS = "id,title,content,authorID,created_at"


def _row_to_blog(row: dict[str, Any]) -> dict[str, Any]:
    """Convert a blog row to Blog fields (no images, comments or author yet)."""
    return {
        "id": str(row["id"]),
        "title": row.get("title") or "",
        "content": row.get("content") or "",
        "author_id": str(row["authorID"]),
        "created_at": row.get("created_at"),
    }


class BlogRepo:
    """All blog-related gateway operations."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def create(self, title: str, content: str, author_id: str) -> dict[str, Any]:
        result = await self.gateway.insert(
            TABLE,
            {"title": title, "content": content, "authorID": author_id},
            single=True,
        )
        return _row_to_blog(result.data)

    async def get(self, blog_id: str) -> dict[str, Any] | None:
        result = await self.gateway.select(TABLE, COLUMNS, filters=[eq("id", blog_id)], maybe_single=True)
        return _row_to_blog(result.data) if result.data else None

    async def update(self, blog_id: str, title: str, content: str) -> dict[str, Any]:
        """
        Update title and content of one blog.

        Raises:
            GatewayError: If the update fails or does not match exactly one row
        """
        result = await self.gateway.update(
            TABLE,
            {"title": title, "content": content},
            filters=[eq("id", blog_id)],
            single=True,
        )
        return _row_to_blog(result.data)

    async def delete(self, blog_id: str) -> int:
        """Delete one blog row. Returns the number of rows removed."""
        result = await self.gateway.delete(TABLE, filters=[eq("id", blog_id)])
        return len(result.rows)

    async def list_page(self, page: int, per_page: int) -> tuple[list[dict[str, Any]], int]:
        """
        One page of blogs, newest first.

        Returns:
            (blog field dicts, total row count)
        """
        result = await self.gateway.select(
            TABLE,
            COLUMNS,
            order=Order("created_at", descending=True),
            row_range=page_range(page, per_page),
            count="exact",
        )
        return [_row_to_blog(r) for r in result.rows], result.count or 0

    async def list_by_author(self, author_id: str, page: int, per_page: int) -> tuple[list[dict[str, Any]], int]:
        """One page of an author's blogs in id order, with an estimated total."""
        result = await self.gateway.select(
            TABLE,
            COLUMNS,
            filters=[eq("authorID", author_id)],
            order=Order("id"),
            row_range=page_range(page, per_page),
            count="estimated",
        )
        return [_row_to_blog(r) for r in result.rows], result.count or 0
