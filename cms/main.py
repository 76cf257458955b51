import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cms.routers import admin, auth, comments, posts, subscribers
from cms.security import require_admin
from cms.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AI Lodi CMS API", description="Blog admin: posts, comments, subscribers")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

admin_only = [Depends(require_admin)]

app.include_router(auth.router)
app.include_router(posts.router)
app.include_router(posts.admin_router, dependencies=admin_only)
app.include_router(comments.router)
app.include_router(comments.admin_router, prefix="/admin", dependencies=admin_only)
app.include_router(subscribers.router)
app.include_router(subscribers.admin_router, prefix="/admin", dependencies=admin_only)
app.include_router(admin.router, prefix="/admin", dependencies=admin_only)


@app.get("/")
async def root():
    return {"message": "AI Lodi CMS API is running"}
