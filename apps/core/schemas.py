"""Schema base classes shared by the API routers."""
from ninja import Schema
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(Schema):
    """
    Wire schema with camelCase keys (mobile client contract).

    Python code keeps snake_case names; aliases are used on the wire and
    ``populate_by_name`` lets services build instances from DTO fields.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageOut(Schema):
    message: str


class DeletedOut(Schema):
    deleted: bool
