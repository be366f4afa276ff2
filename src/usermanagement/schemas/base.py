from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire and snake_case in Python.

    Incoming JSON may use either form; FastAPI serializes responses by alias,
    so clients always see camelCase keys.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ORMBase(CamelModel):
    """Base schema enabling attribute (ORM) population for Pydantic v2 models.

    Inherit from this class for any read/response schema that will be constructed
    directly from ORM / domain objects rather than plain dicts.
    """
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
