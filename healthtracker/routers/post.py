# routers/post.py
# 커뮤니티 피드: 이미지 + 캡션, 좋아요, 댓글
import logging
import os
import uuid

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form, status

from ..core.config import UPLOAD_DIR, MAX_UPLOAD_BYTES
from ..crud import post as post_crud
from ..dependencies import get_current_user
from ..schemas.post import CommentCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}
MAX_CAPTION_LENGTH = 300


def image_path(image_url: str) -> str:
    return os.path.join(UPLOAD_DIR, os.path.basename(image_url))


async def load_post(post_id: int) -> dict:
    post = await post_crud.get_post(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.get("")
async def read_posts(current_user: dict = Depends(get_current_user)):
    return await post_crud.list_posts(current_user["id"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    image: UploadFile = File(...),
    caption: str = Form(""),
    current_user: dict = Depends(get_current_user)
):
    if len(caption) > MAX_CAPTION_LENGTH:
        raise HTTPException(status_code=400, detail=f"Caption must be {MAX_CAPTION_LENGTH} characters or less")
    extension = ALLOWED_IMAGE_TYPES.get(image.content_type)
    if extension is None:
        raise HTTPException(status_code=400, detail="Only JPEG, PNG and WEBP images are allowed")

    contents = await image.read()
    if not contents:
        raise HTTPException(status_code=400, detail="Image file is empty")
    if len(contents) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=400, detail="Image must be 5MB or smaller")

    os.makedirs(UPLOAD_DIR, exist_ok=True)
    filename = f"{uuid.uuid4().hex}{extension}"
    with open(os.path.join(UPLOAD_DIR, filename), "wb") as f:
        f.write(contents)

    image_url = f"/uploads/{filename}"
    post_id = await post_crud.create_post(current_user["id"], caption.strip(), image_url)
    logger.info("user %s created post %s", current_user["id"], post_id)
    return {"id": post_id, "caption": caption.strip(), "image_url": image_url}


@router.post("/{post_id}/like")
async def toggle_like(post_id: int, current_user: dict = Depends(get_current_user)):
    await load_post(post_id)
    liked, likes = await post_crud.toggle_like(post_id, current_user["id"])
    return {"liked": liked, "likes": likes}


@router.post("/{post_id}/comments", status_code=status.HTTP_201_CREATED)
async def add_comment(post_id: int, body: CommentCreate, current_user: dict = Depends(get_current_user)):
    await load_post(post_id)
    comment = await post_crud.add_comment(post_id, current_user["id"], body.text)
    return {**comment, "user": {"id": current_user["id"], "username": current_user["username"]}}


@router.delete("/{post_id}")
async def delete_post(post_id: int, current_user: dict = Depends(get_current_user)):
    post = await load_post(post_id)
    if post["user_id"] != current_user["id"]:
        raise HTTPException(status_code=403, detail="You can only delete your own posts")

    await post_crud.delete_post(post_id)
    path = image_path(post["image_url"])
    if os.path.exists(path):
        os.remove(path)
    return {"success": True, "message": "Post deleted"}
