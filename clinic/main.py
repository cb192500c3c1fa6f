from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from clinic.api.routes import router as api_router
from clinic.core.config import get_settings
from clinic.core.errors import ClinicError
from clinic.core.logging import setup_logging
from clinic.services.db import init_db

settings = get_settings()
setup_logging(settings.logging)

app = FastAPI(title="Dental Clinic API", version="0.1.0")

app.include_router(api_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError) -> JSONResponse:
    logger.info(
        "{method} {path} rejected with {code}: {error}",
        method=request.method,
        path=request.url.path,
        code=exc.code,
        error=exc,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error for {method} {path}", method=request.method, path=request.url.path)
    return JSONResponse(status_code=500, content={"error": "SERVER_ERROR"})


@app.on_event("startup")
async def on_startup() -> None:
    init_db()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("clinic.main:app", host=settings.host, port=settings.port)
