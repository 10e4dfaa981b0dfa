# crud/post.py
from ..database import database
from ..utils import clock


async def create_post(user_id: int, caption: str, image_url: str) -> int:
    return await database.execute(
        query="""
            INSERT INTO posts (user_id, caption, image_url, created_at)
            VALUES (:user_id, :caption, :image_url, :created_at)
        """,
        values={"user_id": user_id, "caption": caption, "image_url": image_url,
                "created_at": clock.to_iso(clock.utcnow())},
    )


async def get_post(post_id: int) -> dict | None:
    row = await database.fetch_one(query="SELECT * FROM posts WHERE id = :id", values={"id": post_id})
    return dict(row._mapping) if row else None


async def _comments(post_id: int) -> list[dict]:
    rows = await database.fetch_all(
        query="""
            SELECT c.id, c.text, c.created_at, c.user_id, u.username
            FROM post_comments c JOIN users u ON u.id = c.user_id
            WHERE c.post_id = :post_id ORDER BY c.id
        """,
        values={"post_id": post_id},
    )
    return [
        {"id": row["id"], "text": row["text"], "created_at": row["created_at"],
         "user": {"id": row["user_id"], "username": row["username"]}}
        for row in rows
    ]


async def _like_user_ids(post_id: int) -> list[int]:
    rows = await database.fetch_all(query="SELECT user_id FROM post_likes WHERE post_id = :post_id",
                                    values={"post_id": post_id})
    return [row["user_id"] for row in rows]


async def list_posts(viewer_id: int) -> list[dict]:
    """최신 글부터 작성자, 좋아요, 댓글을 붙여서 반환합니다."""
    rows = await database.fetch_all(query="""
        SELECT p.id, p.caption, p.image_url, p.created_at, p.user_id, u.username, u.profile_image
        FROM posts p JOIN users u ON u.id = p.user_id
        ORDER BY p.id DESC
    """)
    posts = []
    for row in rows:
        likes = await _like_user_ids(row["id"])
        posts.append({
            "id": row["id"],
            "caption": row["caption"],
            "image_url": row["image_url"],
            "created_at": row["created_at"],
            "user": {"id": row["user_id"], "username": row["username"], "profile_image": row["profile_image"]},
            "likes": len(likes),
            "liked": viewer_id in likes,
            "comments": await _comments(row["id"]),
        })
    return posts


async def toggle_like(post_id: int, user_id: int) -> tuple[bool, int]:
    values = {"post_id": post_id, "user_id": user_id}
    existing = await database.fetch_one(
        query="SELECT id FROM post_likes WHERE post_id = :post_id AND user_id = :user_id", values=values)
    if existing:
        await database.execute(query="DELETE FROM post_likes WHERE id = :id", values={"id": existing["id"]})
        liked = False
    else:
        await database.execute(query="INSERT INTO post_likes (post_id, user_id) VALUES (:post_id, :user_id)",
                               values=values)
        liked = True
    return liked, len(await _like_user_ids(post_id))


async def add_comment(post_id: int, user_id: int, text: str) -> dict:
    created_at = clock.to_iso(clock.utcnow())
    comment_id = await database.execute(
        query="""
            INSERT INTO post_comments (post_id, user_id, text, created_at)
            VALUES (:post_id, :user_id, :text, :created_at)
        """,
        values={"post_id": post_id, "user_id": user_id, "text": text, "created_at": created_at},
    )
    return {"id": comment_id, "text": text, "created_at": created_at, "user_id": user_id}


async def delete_post(post_id: int):
    async with database.transaction():
        await database.execute(query="DELETE FROM post_likes WHERE post_id = :post_id", values={"post_id": post_id})
        await database.execute(query="DELETE FROM post_comments WHERE post_id = :post_id", values={"post_id": post_id})
        await database.execute(query="DELETE FROM posts WHERE id = :id", values={"id": post_id})


async def list_user_image_urls(user_id: int) -> list[str]:
    rows = await database.fetch_all(query="SELECT image_url FROM posts WHERE user_id = :user_id",
                                    values={"user_id": user_id})
    return [row["image_url"] for row in rows]
