from fastapi import APIRouter

from gitassist.api.v1 import commits, issues, refine, releases, repositories

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(commits.router)
api_router.include_router(repositories.router)
api_router.include_router(issues.router)
api_router.include_router(releases.router)
api_router.include_router(refine.router)
