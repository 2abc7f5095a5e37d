from fastapi import APIRouter
from defi_news.api.v1 import news


api_router = APIRouter()
api_router.include_router(news.router)
