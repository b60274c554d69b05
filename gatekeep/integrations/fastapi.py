"""
FastAPI integration - authorization as a route dependency.

Usage:
    from fastapi import Depends
    from gatekeep.integrations.fastapi import require

    @app.get("/posts/{post_id}")
    async def get_post(
        result: AuthorizationResult = Depends(
            require(authz, "read", subject=current_user, resource=load_post)
        ),
    ):
        return result.resource

`subject`, `resource` and `context` are ordinary FastAPI dependencies, so
they can take path params, headers or other dependencies. A denial becomes
a 403; usage errors (unknown resource type, bad provider) are bugs and
propagate. The check runs in the threadpool since ACL providers may block.
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from gatekeep.core.authorizer import Authorizer
from gatekeep.core.errors import AuthorizationError
from gatekeep.core.result import AuthorizationResult


def _no_context() -> dict[str, Any]:
    return {}


def require(
    authorizer: Authorizer,
    action: Any,
    *,
    subject: Callable[..., Any],
    resource: Callable[..., Any],
    context: Callable[..., dict[str, Any]] | None = None,
) -> Callable:
    """
    Require the current subject to be allowed the action on the resource.

    Args:
        authorizer: The Authorizer to check with
        action: Action name, must be registered for the resource type
        subject: Dependency resolving the current subject
        resource: Dependency resolving the resource being accessed
        context: Optional dependency resolving extra context kwargs

    Returns:
        FastAPI dependency that resolves to the AuthorizationResult
    """
    context_dependency = context or _no_context

    async def dependency(
        current_subject: Any = Depends(subject),
        current_resource: Any = Depends(resource),
        extra: dict[str, Any] = Depends(context_dependency),
    ) -> AuthorizationResult:
        try:
            return await run_in_threadpool(
                authorizer.authorize, current_subject, current_resource, action, **extra
            )
        except AuthorizationError as e:
            raise HTTPException(status_code=403, detail=e.result.message) from e

    return dependency
