from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware
from common.mongo.client import close_client

from .api.health import router as health_router
from .api.v1 import api_router
from .exceptions import StoreUnavailableError


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
    yield
    close_client()


async def handle_store_error(request: Request, exc: PyMongoError) -> JSONResponse:
    """처리되지 않은 데이터 저장소 오류는 재시도 가능한 503 으로 응답한다."""

    logger.error(
        "data store error",
        exc_info=exc,
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "path": request.url.path,
            "user_id": getattr(request.state, "user_id", None),
        },
    )
    error = StoreUnavailableError()
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": {"code": error.code, "message": error.message}},
    )


def create_app() -> FastAPI:
    setup_logger()
    app = FastAPI(
        title="Operators Store Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    # 공통 Request/Span ID 로그 미들웨어
    app.add_middleware(RequestTraceMiddleware)
    app.add_exception_handler(PyMongoError, handle_store_error)

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    import uvicorn

    port = int(os.getenv("STORE_SERVICE_PORT", "8003"))
    uvicorn.run(
        "store_service.app.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
