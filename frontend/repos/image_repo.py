"""Repository for blog image rows."""

from __future__ import annotations

from typing import Any

from frontend.gateway import Gateway, Order, eq, in_

TABLE = "tblimage"


def _row_to_image(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": str(row["imageID"]) if row.get("imageID") is not None else None,
        "blog_id": str(row["blogID"]),
        "image_path": row.get("imagePath") or "",
        "alt_text": row.get("altText") or "",
        "sort_order": row.get("sort_order") or 0,
    }


class ImageRepo:
    """All image-related gateway operations."""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def insert_many(self, blog_id: str, encoded: list[tuple[str, str]]) -> list[dict[str, Any]]:
        """
        Insert images for a blog in one call.

        Args:
            blog_id: Owning blog
            encoded: (data URL, alt text) pairs; list position becomes sort_order

        Returns:
            Inserted image field dicts in sort order
        """
        if not encoded:
            return []
        rows = [
            {"blogID": blog_id, "imagePath": data_url, "altText": alt_text, "sort_order": position}
            for position, (data_url, alt_text) in enumerate(encoded)
        ]
        result = await self.gateway.insert(TABLE, rows)
        return sorted((_row_to_image(r) for r in result.rows), key=lambda img: img["sort_order"])

    async def list_for_blog(self, blog_id: str) -> list[dict[str, Any]]:
        result = await self.gateway.select(TABLE, filters=[eq("blogID", blog_id)], order=Order("sort_order"))
        return [_row_to_image(r) for r in result.rows]

    async def delete_ids(self, image_ids: list[str]) -> int:
        if not image_ids:
            return 0
        result = await self.gateway.delete(TABLE, filters=[in_("imageID", image_ids)])
        return len(result.rows)

    async def delete_for_blog(self, blog_id: str) -> int:
        result = await self.gateway.delete(TABLE, filters=[eq("blogID", blog_id)])
        return len(result.rows)
