from __future__ import annotations

import uuid

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.post import Post
from models.schemas.post import PostCreateSchema, PostOutSchema
from utils.censor import censor
from utils.decorators import jwt_required
from utils.exceptions import ForbiddenError, PostNotFoundError

bp = Blueprint("posts", __name__)

post_create_schema = PostCreateSchema()
post_out_schema = PostOutSchema()
posts_out_schema = PostOutSchema(many=True)


def parse_uuid(value: str, name: str) -> str:
    try:
        return str(uuid.UUID(value))
    except ValueError:
        abort(400, description=f"Invalid {name}")


def parse_sort():
    sort = request.args.get("sort", "asc")
    if sort not in ("asc", "desc"):
        abort(400, description="Unsupported sort order. Allowed: asc, desc")
    return Post.created_at.desc() if sort == "desc" else Post.created_at.asc()


def get_post_or_404(post_id: str) -> Post:
    with storage.guard() as session:
        post = session.query(Post).filter(Post.id == parse_uuid(post_id, "post id")).first()
    if post is None:
        raise PostNotFoundError("post not found")
    return post


@bp.post("/posts")
@jwt_required()
def create_post():
    """
    Create a post as the authenticated user
    ---
    tags:
      - Posts
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            body: { type: string }
    responses:
      201:
        description: Created
      401:
        description: Unauthorized
      422:
        description: Validation error
    """
    payload = request.get_json(silent=True) or {}
    data = post_create_schema.load(payload)

    post = Post(body=censor(data["body"]), user_id=str(g.current_user_id))
    with storage.guard():
        storage.new(post)
        storage.save()
    return jsonify(post_out_schema.dump(post)), 201


@bp.get("/posts")
def list_posts():
    """
    List posts, oldest first unless sort=desc
    ---
    tags:
      - Posts
    parameters:
      - in: query
        name: author_id
        type: string
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
    responses:
      200: { description: OK }
      400: { description: Bad query parameter }
    """
    order_by = parse_sort()
    author_id = request.args.get("author_id")

    with storage.guard() as session:
        query = session.query(Post)
        if author_id:
            query = query.filter(Post.user_id == parse_uuid(author_id, "author id"))
        rows = query.order_by(order_by).all()
    return jsonify(posts_out_schema.dump(rows)), 200


@bp.get("/posts/<post_id>")
def get_post(post_id: str):
    """
    Fetch a single post
    ---
    tags:
      - Posts
    parameters:
      - in: path
        name: post_id
        type: string
        required: true
    responses:
      200: { description: OK }
      400: { description: Invalid post id }
      404: { description: Not found }
    """
    return jsonify(post_out_schema.dump(get_post_or_404(post_id))), 200


@bp.delete("/posts/<post_id>")
@jwt_required()
def delete_post(post_id: str):
    """
    Delete one of your own posts
    ---
    tags:
      - Posts
    security:
      - Bearer: []
    parameters:
      - in: path
        name: post_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      401: { description: Unauthorized }
      403: { description: Not the author }
      404: { description: Not found }
    """
    post = get_post_or_404(post_id)
    if post.user_id != str(g.current_user_id):
        raise ForbiddenError("You can only delete your own posts")
    with storage.guard():
        storage.delete(post)
        storage.save()
    return ("", 204)
