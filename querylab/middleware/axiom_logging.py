"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per request to Axiom: endpoint, method,
query parameters (the search condition), status code, duration,
result size for list responses, and the error reason for failures.
"""

import json
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from querylab.config import settings

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 응답 본문을 읽을 최대 크기 — Largest response body inspected for size/error
_MAX_INSPECT_BYTES = 1_000_000


def _truncate(value: str, max_len: int = 500) -> str:
    """로그 크기 제한 — Truncate long strings to keep events small."""
    if len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


def _summarize_body(status_code: int, body: bytes) -> dict[str, Any]:
    """응답 본문에서 결과 크기 또는 오류 사유를 추출합니다.

    List bodies report ``result_count``; page bodies report ``result_count``
    and ``total``; error bodies report ``error``.
    """
    try:
        data: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        if status_code >= 400:
            return {"error": _truncate(body.decode("utf-8", errors="replace"))}
        return {}

    if status_code >= 400:
        detail: Any = data.get("detail", data) if isinstance(data, dict) else data
        return {"error": _truncate(detail if isinstance(detail, str) else json.dumps(detail))}
    if isinstance(data, list):
        return {"result_count": len(data)}
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        return {"result_count": len(data["items"]), "total": data.get("total")}
    return {}


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.
    Passes requests straight through when Axiom is not configured.
    """

    def __init__(
        self,
        app: Any,
        client: Any | None = None,
        dataset: str | None = None,
    ) -> None:
        super().__init__(app)
        self._client: Any | None = client
        self._dataset: str = dataset or settings.AXIOM_DATASET

        if self._client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 및 미설정시 패스스루 — Skip excluded paths or unconfigured Axiom
        if request.url.path in _SKIP_PATHS or self._client is None:
            return await call_next(request)

        start_time = time.time()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        if request.query_params:
            event["query_params"] = dict(request.query_params)

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code

            # JSON 또는 에러 응답 본문 검사 후 재구성 — Inspect JSON or error body, then re-wrap it
            is_json: bool = response.headers.get("content-type", "").startswith("application/json")
            if is_json or response.status_code >= 400:
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                if len(body) <= _MAX_INSPECT_BYTES:
                    event.update(_summarize_body(response.status_code, body))

                response = Response(
                    content=body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.time() - start_time) * 1000, 2)
            try:
                self._client.ingest_events(self._dataset, [event])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure

        return response
