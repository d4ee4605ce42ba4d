"""
Blog endpoints.

Articles are public to read.  Writing requires an administrator.
Article ids are generated by the server (``post-<hex>``); an ``id`` in
the request body is ignored.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ...core.security import require_admin
from ...schemas.blog import ArticleCreate, ArticleUpdate
from ...services.blog_service import BlogService
from ..deps import get_blog_service

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_articles(blog: BlogService = Depends(get_blog_service)) -> List[Dict[str, Any]]:
    return await blog.list_records()


@router.get("/{article_id}")
async def get_article(article_id: str, blog: BlogService = Depends(get_blog_service)) -> Dict[str, Any]:
    return await blog.get_record(article_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_article(
    article: ArticleCreate,
    current_user: dict = Depends(require_admin),
    blog: BlogService = Depends(get_blog_service),
) -> Dict[str, Any]:
    return await blog.create_record(article.model_dump(exclude_unset=True), actor=current_user.get("username"))


@router.put("/{article_id}")
async def update_article(
    article_id: str,
    updates: ArticleUpdate,
    current_user: dict = Depends(require_admin),
    blog: BlogService = Depends(get_blog_service),
) -> Dict[str, Any]:
    changes = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}
    return await blog.update_record(article_id, changes, actor=current_user.get("username"))


@router.delete("/{article_id}")
async def delete_article(
    article_id: str,
    current_user: dict = Depends(require_admin),
    blog: BlogService = Depends(get_blog_service),
) -> Dict[str, Any]:
    removed = await blog.delete_record(article_id, actor=current_user.get("username"))
    return {"success": True, "removed": removed}
