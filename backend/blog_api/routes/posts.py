"""
Blog API — Posts Route Handlers
================================

What:  CRUD endpoints for the posts resource.
How:   Extracts path parameters and bodies, delegates to PostService, returns JSON.

Route Inventory:
    POST   /posts        → 201 created post
    GET    /posts        → 200 list of posts
    GET    /posts/{id}   → 200 single post
    PUT    /posts/{id}   → 200 confirmation message
    DELETE /posts/{id}   → 200 confirmation message

Errors are raised by the service and formatted by the global handlers in main.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorCollection

from blog_api.database import get_posts_collection
from blog_api.schemas.post import (
    ErrorResponse,
    MessageResponse,
    PostPayload,
    PostResponse,
)
from blog_api.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])

_INVALID_ID = {"description": "Malformed post ID or body", "model": ErrorResponse}
_NOT_FOUND = {"description": "Post not found", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Database error", "model": ErrorResponse}


@router.post(
    "",
    status_code=201,
    response_model=PostResponse,
    responses={400: _INVALID_ID, 500: _SERVER_ERROR},
    summary="Create a blog post",
)
async def create_post(
    payload: PostPayload,
    collection: AsyncIOMotorCollection = Depends(get_posts_collection),
) -> PostResponse:
    return await post_service.create_post(collection, payload)


@router.get(
    "",
    response_model=List[PostResponse],
    responses={500: _SERVER_ERROR},
    summary="List all blog posts",
    description="Returns every post in storage order. No filtering or pagination.",
)
async def list_posts(
    collection: AsyncIOMotorCollection = Depends(get_posts_collection),
) -> List[PostResponse]:
    return await post_service.list_posts(collection)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses={400: _INVALID_ID, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Get a blog post by ID",
)
async def get_post(
    post_id: str,
    collection: AsyncIOMotorCollection = Depends(get_posts_collection),
) -> PostResponse:
    """
    Args:
        post_id: 24-character hex ObjectId. Parsed by the service so that a
                 malformed value yields 400 instead of FastAPI's 422.
    """
    return await post_service.get_post(collection, post_id)


@router.put(
    "/{post_id}",
    response_model=MessageResponse,
    responses={400: _INVALID_ID, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Replace the title and content of a blog post",
)
async def update_post(
    post_id: str,
    payload: PostPayload,
    collection: AsyncIOMotorCollection = Depends(get_posts_collection),
) -> MessageResponse:
    return await post_service.update_post(collection, post_id, payload)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={400: _INVALID_ID, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Delete a blog post",
)
async def delete_post(
    post_id: str,
    collection: AsyncIOMotorCollection = Depends(get_posts_collection),
) -> MessageResponse:
    return await post_service.delete_post(collection, post_id)
