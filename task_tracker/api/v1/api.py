from fastapi import APIRouter
from .endpoints import auth, tasks, projects, tags

router = APIRouter()

# Include all API endpoints
router.include_router(auth.router, prefix="/auth", tags=["authentication"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
