from fastapi import APIRouter

from .admin import router as admin_router
from .credits import router as credits_router
from .faq import router as faq_router
from .orders import router as orders_router
from .products import router as products_router
from .session import router as session_router
from .shell import router as shell_router

api_router = APIRouter()
api_router.include_router(session_router, prefix="/session", tags=["session"])
api_router.include_router(shell_router, prefix="/shell", tags=["shell"])
api_router.include_router(credits_router, prefix="/credits", tags=["credits"])
api_router.include_router(products_router, prefix="/products", tags=["products"])
api_router.include_router(orders_router, prefix="/orders", tags=["orders"])
api_router.include_router(faq_router, prefix="/faq", tags=["faq"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
