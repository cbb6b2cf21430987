"""V1 API router aggregating all sub-routers."""

from fastapi import APIRouter

from todoapi.api.v1.auth.router import router as auth_router
from todoapi.api.v1.system.router import router as system_router
from todoapi.api.v1.todos.router import router as todos_router

v1_router = APIRouter()
v1_router.include_router(system_router, prefix="/system", tags=["system"])
v1_router.include_router(auth_router, prefix="/auth", tags=["auth"])
v1_router.include_router(todos_router, prefix="/todos", tags=["todos"])
