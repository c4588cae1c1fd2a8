from __future__ import annotations  # Companion service forwarding role descriptions to the hosted model

import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from llm_gateway import LlmGatewayError, LlmValidationError

from . import generator


logger = logging.getLogger(__name__)

app = FastAPI(title="ReadySetHire Question Proxy")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.PROXY_ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


async def _job_role(request: Request) -> Optional[Any]:
    if request.method == "GET":
        return request.query_params.get("job_role")
    try:
        body = await request.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("job_role")
    return None


@app.api_route("/api/generate-question", methods=["GET", "POST"])
async def generate_question(request: Request) -> JSONResponse:  # Generate questions for a role description
    role = await _job_role(request)
    if not role or not isinstance(role, str):
        return JSONResponse(status_code=400, content={"error": "Role Description is required"})
    try:
        result = await run_in_threadpool(
            generator.generate_with_config, role, config_path=Path(settings.LLM_CONFIG_PATH)
        )
    except LlmValidationError as exc:
        logger.warning("Model returned invalid schema: %s", exc.errors)
        return JSONResponse(
            status_code=502,
            content={"error": "Model returned invalid schema", "details": exc.errors},
        )
    except (LlmGatewayError, KeyError, OSError):
        logger.exception("Error generating interview questions")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to generate interview questions, ensure role description and interview is added first."
            },
        )
    return JSONResponse(content=result.model_dump(mode="json"))
