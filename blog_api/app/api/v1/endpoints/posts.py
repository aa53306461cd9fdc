"""
Post endpoints for API v1.

These routes provide CRUD operations for blog posts.  Request bodies
and path ids are validated by pydantic; invalid input is turned into a
400 response by the handler registered in ``main.create_app``.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status

from blog_api.app.core.errors import PostNotFoundError
from blog_api.app.schemas.post import PostCreate, PostList, PostRead, PostUpdate
from blog_api.app.services.post_service import PostService

POST_ID_PATTERN = r"^[0-9a-f]{32}$"

router = APIRouter()


def get_post_service(request: Request) -> PostService:
    """Return the ``PostService`` attached to the running application."""
    return request.app.state.post_service


@router.get("", response_model=PostList)
async def list_posts(service: PostService = Depends(get_post_service)) -> PostList:
    """Return all blog posts under the ``posts`` key."""
    return PostList(posts=await service.list_posts())


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    post: PostCreate,
    service: PostService = Depends(get_post_service),
) -> PostRead:
    """Create a new post.

    ``title``, ``content`` and a complete ``author`` are required.  The
    response carries the server-assigned ``id`` and ``created``.
    """
    return await service.create_post(post)


@router.get("/{post_id}", response_model=PostRead)
async def get_post(
    post_id: str = Path(..., pattern=POST_ID_PATTERN),
    service: PostService = Depends(get_post_service),
) -> PostRead:
    """Retrieve a single post by its id.  Raises 404 if it does not exist."""
    try:
        return await service.get_post(post_id)
    except PostNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.put("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_post(
    updates: PostUpdate,
    post_id: str = Path(..., pattern=POST_ID_PATTERN),
    service: PostService = Depends(get_post_service),
) -> None:
    """Update an existing post.

    Partial updates are supported; any unspecified fields remain
    unchanged.  An ``id`` in the body is ignored, the path decides
    which post is modified.
    """
    try:
        await service.update_post(post_id, updates)
    except PostNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return None


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str = Path(..., pattern=POST_ID_PATTERN),
    service: PostService = Depends(get_post_service),
) -> None:
    """Delete a post.  Succeeds whether or not the post existed."""
    await service.delete_post(post_id)
    return None
