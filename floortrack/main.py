import logging
import time
from datetime import datetime, timezone
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from supabase import Client

from floortrack.config import settings
from floortrack.core.dependencies import get_current_auth_user
from floortrack.core.errors import store_error
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.auth import routes as auth_routes
from floortrack.modules.buildings import routes as buildings_routes
from floortrack.modules.floors import routes as floors_routes
from floortrack.modules.aps import routes as aps_routes
from floortrack.modules.devices import routes as devices_routes
from floortrack.modules.global_permissions import routes as global_permissions_routes
from floortrack.modules.groups import routes as groups_routes
from floortrack.modules.roles import routes as roles_routes
from floortrack.modules.users import routes as users_routes
from floortrack.modules.profile import routes as profile_routes
from floortrack.modules.stats import routes as stats_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logging.Formatter.converter = time.gmtime
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


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router)
app.include_router(buildings_routes.router)
app.include_router(floors_routes.router)
app.include_router(aps_routes.router)
app.include_router(devices_routes.router)
app.include_router(global_permissions_routes.router)
app.include_router(groups_routes.router)
app.include_router(roles_routes.router)
app.include_router(users_routes.router)
app.include_router(profile_routes.router)
app.include_router(stats_routes.router)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Application startup ({settings.environment})")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to floortrack", "status": "healthy"}


@app.get("/api/health")
@limiter.exempt
async def health():
    return {
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/diag")
async def diag(
    auth_user: dict = Depends(get_current_auth_user),
    supabase: Client = Depends(get_supabase)
):
    """Authenticated round-trip through the store"""
    try:
        result = supabase.table("buildings").select("id").limit(1).execute()
    except Exception as e:
        store_error(e, "Diag", "Store unreachable")
    return {"ok": True, "uid": auth_user["id"], "store": "ok", "sampleRows": len(result.data)}
