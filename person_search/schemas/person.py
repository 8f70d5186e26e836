"""Person schema - the document stored in the persons index and returned by the API."""

from uuid import UUID

from pydantic import BaseModel, EmailStr


class Person(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: EmailStr

    def to_document(self) -> dict:
        """JSON-ready source for Elasticsearch (id as canonical string)."""
        return self.model_dump(mode="json")
