from fastapi import APIRouter
from viestiapuri.api import routes

router = APIRouter()
router.include_router(routes.router)
