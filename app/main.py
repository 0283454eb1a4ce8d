"""
FastAPI Application Entry Point

Bistro Boss restaurant API on MongoDB.

Endpoints:
    - POST /create-token, /logout: Session cookie
    - GET /featured-menu: Home page dishes
    - /menu: Menu management (admin)
    - GET /testimonials: Reviews
    - /users: Registration and role management
    - /carts: Shopping cart
    - GET /health: System health check

Author: Bistro Boss Team
Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Any, Optional
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware

from app.core.auth import ADMIN_ONLY, require_auth
from app.core.config import get_settings, setup_logging
from app.core.exceptions import BistroBossError, UnauthorizedError
from app.core.security import (
    TokenClaims,
    clear_token_cookie,
    issue_token,
    set_token_cookie,
)
from app.models import CartItem, MenuItem, Role, Testimonial, User
from app.schemas import (
    AdminCheckResponse,
    CartEntryCreate,
    DeleteResponse,
    ErrorResponse,
    HealthResponse,
    InsertResponse,
    MenuItemCreate,
    MenuItemUpdate,
    MessageResponse,
    SuccessResponse,
    TokenRequest,
    UpdateResponse,
    UserCreate,
    UserInsertResponse,
)
from app.services.cart import enrich_cart
from app.services.store import BaseDocumentStore, get_document_store

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

AUTH_ERRORS = {401: {"model": MessageResponse}}
ADMIN_ERRORS = {401: {"model": MessageResponse}, 403: {"model": MessageResponse}}


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    store = get_document_store()
    if await store.health_check():
        logger.info(f"✅ Pinged your deployment ({store.provider_name}). Database connected!")
    else:
        logger.error(f"❌ Database ping failed ({store.provider_name})")

    if not settings.is_development:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("✅ Bistro Boss server is running...")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await store.close()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Menu, testimonials, carts and users for the Bistro Boss restaurant.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", response_class=PlainTextResponse, tags=["Root"])
async def root() -> str:
    """Liveness string."""
    return "Bistro Boss server is running"


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    store: BaseDocumentStore = Depends(get_document_store),
) -> HealthResponse:
    """Verify the database answers a ping."""
    healthy = await store.health_check()
    return HealthResponse(
        status="operational" if healthy else "degraded",
        database="healthy" if healthy else "unhealthy",
        timestamp=datetime.now(),
    )


# =============================================================================
# SESSION ENDPOINTS
# =============================================================================

@app.post("/create-token", response_model=SuccessResponse, tags=["Auth"])
async def create_token(payload: TokenRequest, response: Response) -> SuccessResponse:
    """Sign a session token for the user and set it as an httpOnly cookie."""
    token = issue_token({"email": payload.email})
    set_token_cookie(response, token)
    logger.info(f"Session token issued for {payload.email}")
    return SuccessResponse(success=True)


@app.post("/logout", response_model=SuccessResponse, tags=["Auth"])
async def logout(response: Response) -> SuccessResponse:
    """Clear the session cookie. The token is not revoked server-side."""
    clear_token_cookie(response)
    return SuccessResponse(success=True)


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@app.get("/featured-menu", response_model=list[MenuItem], tags=["Menu"])
async def featured_menu(
    store: BaseDocumentStore = Depends(get_document_store),
) -> list[dict]:
    """First dishes of the menu for the home page."""
    return await store.find(settings.menu_collection, limit=settings.featured_menu_limit)


@app.get(
    "/menu",
    response_model=list[MenuItem],
    dependencies=ADMIN_ONLY,
    responses=ADMIN_ERRORS,
    tags=["Menu"],
)
async def list_menu(
    store: BaseDocumentStore = Depends(get_document_store),
) -> list[dict]:
    """Full menu."""
    return await store.find(settings.menu_collection)


@app.get(
    "/menu/{item_id}",
    response_model=Optional[MenuItem],
    dependencies=ADMIN_ONLY,
    responses=ADMIN_ERRORS,
    tags=["Menu"],
)
async def get_menu_item(
    item_id: str,
    store: BaseDocumentStore = Depends(get_document_store),
) -> Optional[dict]:
    """One dish, or null when the id matches nothing."""
    return await store.find_by_id(settings.menu_collection, item_id)


@app.post(
    "/menu",
    response_model=InsertResponse,
    dependencies=ADMIN_ONLY,
    responses=ADMIN_ERRORS,
    tags=["Menu"],
)
async def create_menu_item(
    payload: MenuItemCreate,
    store: BaseDocumentStore = Depends(get_document_store),
) -> dict[str, Any]:
    """Add a dish."""
    result = await store.insert_one(settings.menu_collection, payload.model_dump(exclude_none=True))
    logger.info(f"Menu item {result.inserted_id} created: {payload.name}")
    return result.to_dict()


@app.put(
    "/menu/{item_id}",
    response_model=UpdateResponse,
    dependencies=ADMIN_ONLY,
    responses=ADMIN_ERRORS,
    tags=["Menu"],
)
async def replace_menu_item(
    item_id: str,
    payload: MenuItemUpdate,
    store: BaseDocumentStore = Depends(get_document_store),
) -> dict[str, Any]:
    """Update a dish by id, inserting it under that id if missing."""
    result = await store.update_by_id(
        settings.menu_collection,
        item_id,
        payload.model_dump(exclude_unset=True),
        upsert=True,
    )
    return result.to_dict()


@app.delete(
    "/menu/{item_id}",
    response_model=DeleteResponse,
    dependencies=ADMIN_ONLY,
    responses=ADMIN_ERRORS,
    tags=["Menu"],
)
async def delete_menu_item(
    item_id: str,
    store: BaseDocumentStore = Depends(get_document_store),
) -> dict[str, Any]:
    """Remove a dish. Cart rows pointing at it are left in place."""
    result = await store.delete_by_id(settings.menu_collection, item_id)
    return result.to_dict()


# =============================================================================
# TESTIMONIAL ENDPOINTS
# =============================================================================

@app.get("/testimonials", response_model=list[Testimonial], tags=["Testimonials"])
async def list_testimonials(
    store: BaseDocumentStore = Depends(get_document_store),
) -> list[dict]:
    """All reviews."""
    return await store.find(settings.testimonial_collection)


# =============================================================================
# USER ENDPOINTS
# =============================================================================

@app.get(
    "/users",
    response_model=list[User],
    dependencies=ADMIN_ONLY,
    responses=ADMIN_ERRORS,
    tags=["Users"],
)
async def list_users(
    store: BaseDocumentStore = Depends(get_document_store),
) -> list[dict]:
    """All registered users."""
    return await store.find(settings.user_collection)


@app.post("/users", response_model=UserInsertResponse, tags=["Users"])
async def create_user(
    payload: UserCreate,
    store: BaseDocumentStore = Depends(get_document_store),
) -> dict[str, Any]:
    """
    Register a user on first sign-in.

    Signing in again with the same email inserts nothing and reports the
    user as already added.
    """
    existing = await store.find_one(settings.user_collection, {"email": payload.email})
    if existing is not None:
        return {"message": "user already added", "insertedId": None}

    document = {**payload.model_dump(exclude_none=True), "role": Role.CUSTOMER.value}
    result = await store.insert_one(settings.user_collection, document)
    logger.info(f"User {payload.email} registered ({result.inserted_id})")
    return result.to_dict()


@app.delete(
    "/users/{user_id}",
    response_model=DeleteResponse,
    dependencies=ADMIN_ONLY,
    responses=ADMIN_ERRORS,
    tags=["Users"],
)
async def delete_user(
    user_id: str,
    store: BaseDocumentStore = Depends(get_document_store),
) -> dict[str, Any]:
    """Remove a user."""
    result = await store.delete_by_id(settings.user_collection, user_id)
    return result.to_dict()


@app.patch(
    "/users/make-admin/{user_id}",
    response_model=UpdateResponse,
    dependencies=ADMIN_ONLY,
    responses=ADMIN_ERRORS,
    tags=["Users"],
)
async def make_admin(
    user_id: str,
    store: BaseDocumentStore = Depends(get_document_store),
) -> dict[str, Any]:
    """Promote a user to admin."""
    result = await store.update_by_id(
        settings.user_collection,
        user_id,
        {"role": Role.ADMIN.value},
    )
    if result.matched_count:
        logger.info(f"User {user_id} promoted to admin")
    return result.to_dict()


@app.get(
    "/users/admin/{email}",
    response_model=AdminCheckResponse,
    responses=AUTH_ERRORS,
    tags=["Users"],
)
async def check_admin(
    email: str,
    claims: TokenClaims = Depends(require_auth),
    store: BaseDocumentStore = Depends(get_document_store),
) -> AdminCheckResponse:
    """Tell the signed-in user whether they are an admin. Only their own email is answered."""
    if email != claims.email:
        logger.warning(f"{claims.email} asked for the admin status of {email}")
        raise UnauthorizedError()

    user = await store.find_one(settings.user_collection, {"email": email})
    return AdminCheckResponse(admin=bool(user) and user.get("role") == Role.ADMIN.value)


# =============================================================================
# CART ENDPOINTS
# =============================================================================

@app.get("/carts", response_model=list[CartItem], tags=["Carts"])
async def list_cart(
    email: str = Query(..., min_length=1),
    store: BaseDocumentStore = Depends(get_document_store),
) -> list[dict]:
    """A user's cart, each row merged with its menu item."""
    return await enrich_cart(store, email)


@app.post("/carts", response_model=InsertResponse, tags=["Carts"])
async def add_to_cart(
    payload: CartEntryCreate,
    store: BaseDocumentStore = Depends(get_document_store),
) -> dict[str, Any]:
    """Add a dish to a cart."""
    document = payload.model_dump(by_alias=True, exclude_unset=True)
    result = await store.insert_one(settings.cart_collection, document)
    return result.to_dict()


@app.delete("/carts/{entry_id}", response_model=DeleteResponse, tags=["Carts"])
async def remove_from_cart(
    entry_id: str,
    store: BaseDocumentStore = Depends(get_document_store),
) -> dict[str, Any]:
    """Remove a cart row."""
    result = await store.delete_by_id(settings.cart_collection, entry_id)
    return result.to_dict()


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(BistroBossError)
async def bistro_boss_error_handler(request: Request, exc: BistroBossError) -> JSONResponse:
    """Render auth gate failures as ``{"message": ...}``."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            detail=str(exc) if settings.debug else "An unexpected error occurred",
        ).model_dump(),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.api_host, port=settings.api_port)
