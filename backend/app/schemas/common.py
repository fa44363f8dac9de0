from pydantic import BaseModel


class CamelModel(BaseModel):
    """Stored records and payloads use camelCase keys on the wire."""

    class Config:
        populate_by_name = True
        from_attributes = True


class MessageOut(BaseModel):
    message: str
