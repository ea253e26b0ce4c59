import uuid
import time
import json
import logging
from datetime import datetime, timezone
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iconserver.core.config import settings
from iconserver.core.errors import IconServerError
from iconserver.routers import health, icons
from iconserver.services.upstream import UpstreamFetcher, build_http_client


def create_app() -> FastAPI:
    logging.basicConfig(
        level=str(settings.log_level or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    app = FastAPI(title="Icon Server", version="1.0.0")

    logger = logging.getLogger("iconserver")
    logging.getLogger("httpx").setLevel(logging.WARNING)

    allow_origins = [o.strip() for o in str(settings.cors_allow_origins or "").split(",") if o.strip()]
    is_prod = (settings.app_env or "").strip().lower() in {"prod", "production"}

    app.state.upstream = UpstreamFetcher(build_http_client(), cdn_root=settings.cdn_root)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        t0 = time.perf_counter()
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = rid
        status_code: int | None = None
        try:
            response = await call_next(request)
            status_code = int(getattr(response, "status_code", 0) or 0)
        except Exception:
            status_code = 500
            raise
        finally:
            dur_ms = int((time.perf_counter() - t0) * 1000)
            path = request.url.path
            if not path.startswith("/health"):
                logger.info(
                    json.dumps(
                        {
                            "ts": datetime.now(timezone.utc).isoformat(),
                            "rid": rid,
                            "method": request.method,
                            "path": path,
                            "status": status_code,
                            "duration_ms": dur_ms,
                        },
                        ensure_ascii=False,
                    )
                )
        response.headers["X-Request-ID"] = rid

        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        # Icons are meant to be embedded by other origins.
        response.headers.setdefault("Cross-Origin-Resource-Policy", "cross-origin")
        if is_prod:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response

    def _request_id(request: Request) -> str | None:
        rid = getattr(getattr(request, "state", None), "request_id", None)
        rid = str(rid or "").strip()
        return rid or None

    @app.exception_handler(IconServerError)
    async def icon_error_handler(request: Request, exc: IconServerError):
        return JSONResponse(
            status_code=int(exc.status_code),
            content={
                "ok": False,
                "error_code": exc.error_code,
                "error_message": exc.reason,
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        payload = {
            "ok": False,
            "error_code": "not_found" if int(exc.status_code) == 404 else "http_error",
            "error_message": str(exc.detail or "request failed"),
            "request_id": _request_id(request),
        }
        return JSONResponse(status_code=int(exc.status_code), content=payload, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.exception("unhandled exception", extra={"rid": rid})
        return JSONResponse(
            status_code=500,
            content={
                "ok": False,
                "error_code": "internal_error",
                "error_message": "internal server error",
                "request_id": rid,
            },
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(icons.router)

    @app.on_event("shutdown")
    async def _close_upstream() -> None:
        await app.state.upstream.aclose()

    return app


def run() -> None:
    import uvicorn

    uvicorn.run("iconserver.main:app", host=settings.host, port=int(settings.port))


app = create_app()
