import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from urllib.parse import parse_qs


REQUEST_ID_HEADER = "X-Request-Id"
SPAN_ID_HEADER = "X-Span-Id"

# 헬스체크는 로그에서 제외한다.
IGNORED_LOG_PATHS: set[str] = {"/health"}

# 결제 증빙(multipart) 같은 바이너리는 로그에 남기지 않는다.
LOGGABLE_BODY_TYPES: tuple[str, ...] = ("application/json",)
MAX_BODY_LOG_LENGTH = 1024


class RequestTraceMiddleware(BaseHTTPMiddleware):
    """요청 단위 추적 ID 와 access 로그를 담당하는 미들웨어.

    - X-Request-Id 가 없으면 새로 만들고, X-Span-Id 는 없으면 "0" 을 쓴다.
    - request.state 에 request_id / span_id 를 저장하고 응답 헤더에도 그대로 돌려준다.
    - 인증 의존성이 request.state.user_id 를 채웠다면 로그에 함께 남긴다.
    - JSON 바디만 앞부분 일부를 로그에 포함한다.
    """

    def __init__(self, app, logger: logging.Logger | None = None) -> None:  # type: ignore[override]
        super().__init__(app)
        self._logger = logger or logging.getLogger("request_trace")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        span_id = request.headers.get(SPAN_ID_HEADER) or "0"

        request.state.request_id = request_id
        request.state.span_id = span_id
        request.state.user_id = None
        request.state.request_body = await self._read_loggable_body(request)

        should_log = request.url.path not in IGNORED_LOG_PATHS
        start = time.monotonic()

        try:
            response = await call_next(request)
        except Exception:
            if should_log:
                self._logger.exception(
                    "request failed",
                    extra=self._build_log_extra(
                        request, duration=time.monotonic() - start
                    ),
                )
            raise

        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        response.headers.setdefault(SPAN_ID_HEADER, span_id)

        if should_log:
            self._logger.info(
                "completed request",
                extra=self._build_log_extra(
                    request,
                    status=response.status_code,
                    duration=time.monotonic() - start,
                ),
            )

        return response

    async def _read_loggable_body(self, request: Request) -> str | None:
        if request.method not in {"POST", "PUT", "PATCH", "DELETE"}:
            return None

        content_type = request.headers.get("content-type", "")
        if not content_type.startswith(LOGGABLE_BODY_TYPES):
            return None

        try:
            body_bytes = await request.body()
        except Exception:  # noqa: BLE001
            return None
        if not body_bytes:
            return None

        return body_bytes.decode("utf-8", errors="replace")[:MAX_BODY_LOG_LENGTH]

    def _build_log_extra(
        self,
        request: Request,
        status: int | None = None,
        duration: float | None = None,
    ) -> dict[str, object]:
        extra: dict[str, object] = {
            "request_id": request.state.request_id,
            "span_id": request.state.span_id,
            "method": request.method,
            "path": request.url.path,
        }

        query = request.url.query
        if query:
            parsed = parse_qs(query, keep_blank_values=True)
            extra["query_params"] = {
                key: values[0] if len(values) == 1 else values
                for key, values in parsed.items()
            }

        user_id = getattr(request.state, "user_id", None)
        if user_id:
            extra["user_id"] = user_id

        body = getattr(request.state, "request_body", None)
        if body:
            extra["body"] = body

        if status is not None:
            extra["status"] = status

        if duration is not None:
            extra["duration"] = f"{duration * 1000:.3f}ms"

        return extra
