import asyncio
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.modules.auth import routes as auth_routes
from app.modules.business import routes as business_routes
from app.modules.creators import routes as creators_routes
from app.modules.posts import routes as posts_routes
from app.modules.account import routes as account_routes
from app.modules.consent import routes as consent_routes
from app.modules.support import routes as support_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(business_routes.router, prefix="/api/v1")
app.include_router(creators_routes.router, prefix="/api/v1")
app.include_router(posts_routes.router, prefix="/api/v1")
app.include_router(account_routes.router, prefix="/api/v1")
app.include_router(consent_routes.router, prefix="/api/v1")
app.include_router(support_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")

    if settings.post_expiry_sweep_enabled:
        from app.modules.posts.expiry_scheduler import expiry_scheduler_loop
        app.state.expiry_task = asyncio.create_task(expiry_scheduler_loop())
        logger.info(
            f"Post expiry sweep started - will archive expired posts every {settings.post_expiry_sweep_seconds}s"
        )


@app.on_event("shutdown")
async def shutdown_event():
    task = getattr(app.state, "expiry_task", None)
    if task:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        app.state.expiry_task = None
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "AIMarketSpace API: AI automation creators meet businesses", "docs": "/docs"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Ready once Supabase credentials are present; the magic-link and profile routes cannot work without them."""
    missing = [name for name in ("supabase_url", "supabase_key") if not getattr(settings, name)]
    if missing:
        return JSONResponse(status_code=503, content={"status": "not_ready", "missing": missing})
    return {"status": "ready", "post_expiry_sweep": settings.post_expiry_sweep_enabled}
