"""
Authorization of API requests.

Tokens are issued elsewhere, the API only resolves the bearer token of a request
to its owner (configured in `api.yml`) and checks the owner's role:

```yml
auth:
  enabled: true
  tokens:
    <token>: {id: "operator", role: "admin"}
```
"""
from typing import Annotated, Callable, Optional

from fastapi import Depends, Header, HTTPException
from pydantic import BaseModel

from dpstore.api.internal.config import ApiConfig, Role
from dpstore.api.internal.helpers import get_api_config

ROLE_RANK = {Role.USER: 0, Role.ADMIN: 1}


class Caller(BaseModel):
    """Identity of the caller of the current request

    `id` is `None` when authorization is disabled.
    """

    id: Optional[str] = None
    role: Role


def authorize(role: Role) -> Callable[..., Caller]:
    """Creates dependency that lets through only callers with at least `role`"""

    def check_caller(
        api_config: Annotated[ApiConfig, Depends(get_api_config)],
        authorization: Annotated[Optional[str], Header()] = None,
    ) -> Caller:
        if not api_config.auth.enabled:
            return Caller(role=Role.ADMIN)

        if not authorization:
            raise HTTPException(
                status_code=401,
                detail="Missing Authorization header. Expected: Bearer <token>",
                headers={"WWW-Authenticate": "Bearer"},
            )

        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise HTTPException(
                status_code=401,
                detail="Invalid Authorization format. Expected: Bearer <token>",
                headers={"WWW-Authenticate": "Bearer"},
            )

        owner = api_config.auth.tokens.get(token)
        if owner is None:
            raise HTTPException(
                status_code=401,
                detail="Invalid access token",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if ROLE_RANK[owner.role] < ROLE_RANK[role]:
            raise HTTPException(status_code=403, detail="Forbidden")

        return Caller(id=owner.id, role=owner.role)

    return check_caller


ADMIN = authorize(Role.ADMIN)
LOGGED_USER = authorize(Role.USER)
