"""Interview coach service.

A thin HTTP façade over a hosted language model. Routes render a prompt
from the request, call the completion service once and relay the parsed
(or plain-text) answer.

Endpoints:
- GET `/health`: liveness, independent of the completion service.
- POST `/ai/evaluate`, `/ai/question`, `/ai/mcq-question`, `/ai/explain`,
  `/ai/quiz-topic`, `/ai/explain-wrong`, `/ai/followup`.
- POST `/ai/mock-interview/start`, `/ai/mock-interview/evaluate`.

Behavior:
- The completion client is created once at startup and injected into
  handlers. Without an API key the service still starts; completion routes
  then fail per request with status 500.
- All failures are per request and rendered as ``{"error": ...}``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.log import setup_logging
from shared.settings import Settings
from shared.tracing import install_fastapi_tracing

from .completion import build_completion_client
from .errors import install_error_handlers
from .routers import coach, mock_interview

logger = logging.getLogger(__name__)

s = Settings()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    setup_logging(s.log_level, json_output=s.log_json)
    app.state.completion = build_completion_client(s)
    logger.info(
        "Interview coach started",
        extra={"provider": s.llm_provider, "model": s.active_model(), "port": s.port},
    )
    yield
    app.state.completion = None


app = FastAPI(title="Interview Coach AI Service", version="1.0.0", lifespan=_lifespan)
install_fastapi_tracing(app, service_name="interview-coach")
install_error_handlers(app)

origins = s.cors_origin_list()
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def _root():
    return {"status": "ok", "service": "interview-coach"}


@app.get("/health")
def _health():
    return {"status": "ok"}


app.include_router(coach.router)
app.include_router(mock_interview.router)
