"""Aggregate API v1 router — mounts all sub-routers."""
from fastapi import APIRouter
from blogai.api.v1 import generation, crons, assist, posts

router = APIRouter(prefix="/api/v1")

router.include_router(generation.router, tags=["Generation"])
router.include_router(crons.router, tags=["Dispatch"])
router.include_router(assist.router, prefix="/ai", tags=["AI Assist"])
router.include_router(posts.router, prefix="/posts", tags=["Posts"])
