from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.deps import close_search_client, get_settings
from app.api.endpoints import enumerations, health
from app.api.middleware.error_shaping import SafeErrorMiddleware, install_error_handlers
from app.api.middleware.request_context import AccountScopeMiddleware, RequestContextMiddleware
from app.core.config import configure_logging

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    await close_search_client()


app = FastAPI(
    title="Host Enumeration API",
    version="0.1.0",
    lifespan=lifespan,
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call is the OUTERMOST wrapper.
# Runtime order (outermost -> innermost):
#   SafeErrorMiddleware -> RequestContext -> AccountScope -> handler
# ------------------------------------------------------------
app.add_middleware(AccountScopeMiddleware, required=settings.account_required)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(SafeErrorMiddleware)
install_error_handlers(app)

app.include_router(enumerations.router)
app.include_router(health.router)
