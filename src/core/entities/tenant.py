"""Authenticated principal as supplied by the authentication layer."""

from pydantic import BaseModel


class Principal(BaseModel):
    """The caller of a request: user id, role and owning tenant."""

    id: int
    role: str = "user"
    tenant_id: int | None = None
