"""
Left OverCook Web API - FastAPI application.

Uses Supabase Auth for identity. Browser sessions are tracked with the
X-Session-Id header (see overcook.web.session).
"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from overcook import __version__
from overcook.config import settings
from overcook.db.client import get_authenticated_client
from overcook.errors import AuthenticationRequired, OvercookError, RecipeNotFound
from overcook.logging_setup import configure_logging
from overcook.web.auth import AuthenticatedUser, get_current_user, sign_out
from overcook.web.ledger_routes import router as ledger_router
from overcook.web.preference_routes import router as preference_router
from overcook.web.recipe_routes import router as recipe_router
from overcook.web.session import SESSION_HEADER, get_registry
from overcook.web.wizard_routes import router as wizard_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Left OverCook", version=__version__)


@app.on_event("startup")
async def startup_event():
    """Configure logging and report configuration on startup."""
    from overcook.llm.prompt_logger import LOG_PROMPTS

    configure_logging(settings.log_level)
    logger.info("Left OverCook starting up...")
    logger.info(f"  Environment: {settings.overcook_env}")
    logger.info(f"  Prompt file logging: {LOG_PROMPTS}")


# CORS for the React front end; expose the session header so the browser can read it
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[SESSION_HEADER],
)


@app.exception_handler(OvercookError)
async def overcook_error_handler(request: Request, exc: OvercookError) -> JSONResponse:
    """Render domain errors as {"detail": ...} with the error's status code."""
    content: dict = {"detail": exc.message}
    if isinstance(exc, AuthenticationRequired):
        content["redirect"] = "/auth"
    elif isinstance(exc, RecipeNotFound):
        content["redirect"] = "/"
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content)


app.include_router(preference_router, prefix="/api")
app.include_router(wizard_router, prefix="/api")
app.include_router(recipe_router, prefix="/api")
app.include_router(ledger_router, prefix="/api")


@app.get("/health")
async def health_check():
    return {"status": "healthy", "sessions": len(get_registry())}


# =============================================================================
# Auth Endpoints
# =============================================================================


@app.get("/api/me")
async def get_me(user: AuthenticatedUser = Depends(get_current_user)):
    """Get current user info."""
    client = get_authenticated_client(user.access_token)
    result = client.table("profiles").select("username").eq("id", user.id).maybe_single().execute()

    display_name = None
    if result and result.data:
        display_name = result.data.get("username")

    # Fallback to email prefix if no username yet
    if not display_name and user.email:
        display_name = user.email.split("@")[0]

    return {
        "user_id": user.id,
        "email": user.email,
        "display_name": display_name or "Chef",
    }


@app.post("/api/auth/sign-out")
async def sign_out_user(user: AuthenticatedUser = Depends(get_current_user)):
    """Revoke the user's Supabase session. The front end discards its token either way."""
    sign_out(user)
    return {"success": True}
