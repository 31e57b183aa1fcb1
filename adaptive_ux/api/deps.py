"""FastAPI dependencies for resolving the adaptive context."""

from typing import Annotated

from fastapi import Depends, Request

from adaptive_ux.core.context import AdaptiveContext, get_default_context


def get_context(request: Request) -> AdaptiveContext:
    """Get the context attached to the application, or the process default."""
    context = getattr(request.app.state, "adaptive_context", None)
    if context is None:
        context = get_default_context()
    return context


ContextDep = Annotated[AdaptiveContext, Depends(get_context)]
