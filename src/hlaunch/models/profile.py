"""Identity profile returned for a bearer token."""

from pydantic import BaseModel


class Profile(BaseModel):
    """Profile payload; both fields are required strings."""

    name: str
    id: str
