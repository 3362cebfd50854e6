"""
Blog API — Post Service (Business Logic)
=========================================

What:  The five post operations: create, get one, list, update, delete.
Why:   Keeps identifier parsing, not-found mapping, and driver error handling
       out of the HTTP layer.
How:   Each method receives the Motor collection (injected per request by the
       route) and performs exactly one database call.
Who:   Called by route handlers in routes/posts.py.

Error Handling Strategy:
    - Malformed identifiers raise ValidationError BEFORE any database call.
    - A well-formed identifier with no matching document raises NotFoundError.
    - Anything the driver raises (timeouts, network errors, write errors) and
      any stored document that cannot be decoded is logged and wrapped in
      DatabaseError, which the global handler turns into a 500.
"""

import logging
from typing import List

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection

from blog_api.exceptions import DatabaseError, NotFoundError, ValidationError
from blog_api.models.post import BlogPost, parse_object_id
from blog_api.schemas.post import MessageResponse, PostPayload, PostResponse

logger = logging.getLogger(__name__)

RESOURCE = "blog post"


class PostService:
    """
    Business logic layer for blog post operations.

    Stateless: the collection is passed into every call, so one instance is
    shared by all requests.
    """

    @staticmethod
    def _object_id(post_id: str) -> ObjectId:
        try:
            return parse_object_id(post_id)
        except InvalidId:
            raise ValidationError(message="Invalid ID", field="id", context={"post_id": post_id})

    async def create_post(
        self, collection: AsyncIOMotorCollection, payload: PostPayload
    ) -> PostResponse:
        """
        Insert a new post and return it with its assigned identifier.

        Raises:
            DatabaseError: The insert failed (→ 500). Not retried.
        """
        post = BlogPost(title=payload.title, content=payload.content)
        try:
            result = await collection.insert_one(post.to_document())
        except Exception as e:
            logger.error("Failed to insert blog post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to insert blog post",
                context={"error_type": type(e).__name__},
            )

        post.id = result.inserted_id
        logger.info("Blog post created: %s", post.hex_id)
        return PostResponse.from_post(post)

    async def get_post(
        self, collection: AsyncIOMotorCollection, post_id: str
    ) -> PostResponse:
        """
        Retrieve a single post by its hex identifier.

        Raises:
            ValidationError: `post_id` is not a 24-char hex ObjectId (→ 400)
            NotFoundError: No post has that identifier (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        object_id = self._object_id(post_id)

        try:
            doc = await collection.find_one({"_id": object_id})
            if doc is None:
                raise NotFoundError(resource=RESOURCE, resource_id=post_id)
            return PostResponse.from_post(BlogPost.from_document(doc))

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error fetching blog post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Failed to retrieve blog post",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

    async def list_posts(self, collection: AsyncIOMotorCollection) -> List[PostResponse]:
        """
        Return every stored post in natural (storage) order.

        An empty collection yields an empty list. A failure part-way through
        the cursor, including a document that does not decode, is reported as
        DatabaseError; partial results are discarded.
        """
        try:
            posts: List[PostResponse] = []
            async for doc in collection.find({}):
                posts.append(PostResponse.from_post(BlogPost.from_document(doc)))
            return posts

        except Exception as e:
            logger.error("Database error listing blog posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to retrieve blog posts",
                context={"error_type": type(e).__name__},
            )

    async def update_post(
        self,
        collection: AsyncIOMotorCollection,
        post_id: str,
        payload: PostPayload,
    ) -> MessageResponse:
        """
        Overwrite `title` and `content` of an existing post.

        Both fields are always written, so repeating the same update leaves the
        stored document unchanged.

        Raises:
            ValidationError: Malformed identifier (→ 400)
            NotFoundError: No post matched (→ 404)
            DatabaseError: Update failed (→ 500)
        """
        object_id = self._object_id(post_id)

        try:
            result = await collection.update_one(
                {"_id": object_id},
                {"$set": {"title": payload.title, "content": payload.content}},
            )
        except Exception as e:
            logger.error("Failed to update blog post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Failed to update blog post",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        if result.matched_count == 0:
            raise NotFoundError(resource=RESOURCE, resource_id=post_id)

        logger.info("Blog post updated: %s", post_id)
        return MessageResponse(message=f"Blog post with ID {post_id} updated")

    async def delete_post(
        self, collection: AsyncIOMotorCollection, post_id: str
    ) -> MessageResponse:
        """
        Remove a post.

        Raises:
            ValidationError: Malformed identifier (→ 400)
            NotFoundError: No post matched (→ 404)
            DatabaseError: Delete failed (→ 500)
        """
        object_id = self._object_id(post_id)

        try:
            result = await collection.delete_one({"_id": object_id})
        except Exception as e:
            logger.error("Failed to delete blog post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Failed to delete blog post",
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        if result.deleted_count == 0:
            raise NotFoundError(resource=RESOURCE, resource_id=post_id)

        logger.info("Blog post deleted: %s", post_id)
        return MessageResponse(message=f"Blog post with ID {post_id} deleted")


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
