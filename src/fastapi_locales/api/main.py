from fastapi import APIRouter

from fastapi_locales.api.routes import locales

api_router = APIRouter()
api_router.include_router(locales.router)
