"""
FastAPI integration for the Server ACL.
"""

from typing import Any, AsyncIterator, Callable, Dict, Optional

from fastapi import HTTPException, Request
from pydantic import BaseModel, Field

from shared.logging import clear_context, get_logger, set_request_id
from shared.errors import AuthorizationError
from .acl import ServerAcl
from .rules.models import is_conditions


class AclResult(BaseModel):
    """What a guarded route receives once access is granted."""

    endpoint: str
    permitted: bool = True
    conditions: Optional[Dict[str, Any]] = Field(None, description="Scope the grant is limited to")
    context: Dict[str, Any] = Field(default_factory=dict)


class AclGuard:
    """Builds route dependencies that populate the context and check the ACL."""

    def __init__(self, acl: ServerAcl):
        self.acl = acl
        self.logger = get_logger("acl.guard")

    def require(self, endpoint_name: str) -> Callable:
        """Dependency that denies with 403 unless ``endpoint_name`` is permitted.

        Usage:
            @app.post("/create")
            async def create(result: AclResult = Depends(guard.require("post-create"))):
                ...
        """

        async def dependency(request: Request) -> AsyncIterator[AclResult]:
            set_request_id(request.headers.get("X-Request-ID"))
            try:
                context: Dict[str, Any] = {}
                remote_object = getattr(request.app.state, "acl_remote", None)

                # Assessor failures propagate; they are not denials
                await self.acl.populate_context(request, context, remote_object)
                decision = await self.acl.is_permitted(endpoint_name, context)

                if not is_conditions(decision) and not decision:
                    self.logger.info("Access denied", endpoint=endpoint_name, path=request.url.path)
                    error = AuthorizationError(
                        "Access denied",
                        {"endpoint": endpoint_name}
                    )
                    raise HTTPException(status_code=403, detail=error.to_response().model_dump())

                yield AclResult(
                    endpoint=endpoint_name,
                    conditions=decision if is_conditions(decision) else None,
                    context=context
                )
            finally:
                # Correlation fields end with the request
                clear_context()

        return dependency
