from __future__ import annotations  # FastAPI server for interview authoring and applicant sessions

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.recruiter import router as recruiter_router
from api.routes import router as session_router
from config.settings import settings
from errors import ReadySetHireError


logger = logging.getLogger(__name__)

app = FastAPI(title="ReadySetHire API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.API_ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(session_router)
app.include_router(recruiter_router)


def _error_body(code: str, message: str, detail=None) -> dict:
    return {"error": {"code": code, "message": message, "detail": detail}}


@app.exception_handler(ReadySetHireError)
async def readysethire_error_handler(request: Request, exc: ReadySetHireError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed (%s): %s", request.method, request.url.path, exc.code, exc.message)
    else:
        logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.code, exc.message, exc.detail))


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning("%s %s bad request: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content=_error_body("BAD_REQUEST", str(exc)))


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "store": settings.STORE_BACKEND}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api_server:app", host="0.0.0.0", port=8000, reload=False)
