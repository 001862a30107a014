from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pipelines.compare_profile import build_compare_pipeline
from pipelines.runner import Pipeline, RunContext
from services.domain_utils import detect_profile_kind
from services.errors import ConfigurationMissing, InvalidInput, ScrapeExhausted
from utils.logging_setup import init_logging


logger = logging.getLogger(__name__)

app = FastAPI(title="Profile Talking Points API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["*"],
)


PipelineFactory = Callable[[], Pipeline]


@lru_cache(maxsize=1)
def shared_pipeline() -> Pipeline:
    """Build the real pipeline once per process.

    The Apify session and the OpenAI client are reused across requests. A
    ConfigurationMissing error is not cached, so a fixed environment is picked
    up on the next request.
    """
    return build_compare_pipeline()


def get_pipeline_factory() -> PipelineFactory:
    return shared_pipeline


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def build_response(ctx: RunContext) -> Dict[str, Any]:
    profile = ctx.profile
    return {
        "points": list(ctx.result.points) if ctx.result else [],
        "profile": {
            "name": profile.name if profile else "",
            "headline": profile.headline if profile else "",
            "location": profile.location if profile else "",
        },
    }


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON or a body that is not an object
    return _error(400, "Request body must be a JSON object with a \"url\" field")


@app.on_event("startup")
def startup_event() -> None:
    init_logging()


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


# Plain def: FastAPI runs it in its worker thread pool, so one request
# waiting on a scrape run does not hold up the others.
@app.post("/compare")
def compare(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    pipeline_factory: PipelineFactory = Depends(get_pipeline_factory),
):
    url = (payload or {}).get("url")
    if not isinstance(url, str) or not url.strip():
        return _error(400, "URL is required")
    try:
        detect_profile_kind(url)
    except InvalidInput as e:
        return _error(400, str(e))

    try:
        pipeline = pipeline_factory()
        ctx = pipeline.run(RunContext(url=url))
    except InvalidInput as e:
        return _error(400, str(e))
    except ConfigurationMissing as e:
        logger.error(str(e), extra={"step": "compare", "status": "config_missing"})
        return _error(500, "Server is missing required API configuration")
    except ScrapeExhausted as e:
        return _error(502, str(e))
    except Exception as e:
        logger.exception("Unexpected failure", extra={"step": "compare", "status": "error", "error": str(e)})
        return _error(500, str(e) or "Failed to compare profile")

    return build_response(ctx)
