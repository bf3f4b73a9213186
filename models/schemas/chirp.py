from marshmallow import EXCLUDE, Schema, fields, validate

SORT_DIRECTIONS = ("asc", "desc")


class ChirpCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # length limit is checked by the endpoint (400, not 422)
    body = fields.String(required=True)


class ChirpOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    body = fields.String()
    user_id = fields.String()


class ChirpListArgsSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    author_id = fields.UUID(load_default=None)
    sort = fields.String(load_default="asc", validate=validate.OneOf(SORT_DIRECTIONS))
