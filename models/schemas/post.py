from marshmallow import Schema, fields, validate, EXCLUDE

from models.post import MAX_POST_LENGTH


class PostCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    body = fields.String(
        required=True,
        validate=validate.Length(min=1, max=MAX_POST_LENGTH, error="Post must be 1-140 characters."),
    )


class PostOutSchema(Schema):
    id = fields.String()
    body = fields.String()
    user_id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
