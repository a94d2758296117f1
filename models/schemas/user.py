from marshmallow import Schema, fields, pre_load, validates, ValidationError, EXCLUDE

MIN_PASSWORD_LENGTH = 8


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class _EmailNormalizingSchema(Schema):
    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=_norm_email(data["email"]))
        return data


class UserCreateSchema(_EmailNormalizingSchema):
    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True)

    @validates("password")
    def validate_password(self, value, **kwargs):
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 8 characters long.")


# same shape as registration; identity comes from the access token
UserUpdateSchema = UserCreateSchema


class UserLoginSchema(_EmailNormalizingSchema):
    class Meta:
        unknown = EXCLUDE

    # no password rules here: a short password is just a wrong password
    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)


class UserOutSchema(Schema):
    id = fields.String()
    email = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
