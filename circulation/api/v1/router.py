from fastapi import APIRouter

from circulation.api.routers import circulation, items, members, reports

api_router = APIRouter()

api_router.include_router(items.router)
api_router.include_router(members.router)
api_router.include_router(circulation.router)
api_router.include_router(reports.router)
