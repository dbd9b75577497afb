"""API router configuration."""

from fastapi import APIRouter

from api.routes.attachments import router as attachments_router
from api.routes.auth import router as auth_router
from api.routes.comments import router as comments_router
from api.routes.notifications import router as notifications_router
from api.routes.tasks import dashboard_router
from api.routes.tasks import router as tasks_router
from api.routes.teams import router as teams_router
from api.routes.users import router as users_router
from api.routes.workspaces import router as workspaces_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(dashboard_router)
router.include_router(tasks_router)
router.include_router(comments_router)
router.include_router(attachments_router)
router.include_router(teams_router)
router.include_router(workspaces_router)
router.include_router(users_router)
router.include_router(notifications_router)
