from marshmallow import EXCLUDE, Schema, fields

USER_UPGRADED = "user.upgraded"


class PolkaDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(required=True)


class PolkaWebhookSchema(Schema):
    """Payment provider event, e.g. {"event": "user.upgraded", "data": {"user_id": "..."}}"""

    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    # only required for user.upgraded
    data = fields.Nested(PolkaDataSchema, load_default=None)
