"""FastAPI surface — exposes JobAPI.start / JobAPI.status over JSON."""
import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.config import Config
from src.constants import API_TITLE, API_VERSION, HEALTH_MESSAGE
from src.gateway.client import ModelGateway
from src.gateway.http import HttpModelGateway
from src.job_api import JobAPI
from src.job_store import JobStore
from src.models import AnalysisRequest
from src.orchestrator import AnalysisOrchestrator


class StartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_base64s: Optional[list[str]] = Field(default=None, alias="imageBase64s")
    image_base64: Optional[str] = Field(default=None, alias="imageBase64")
    category: str = Field(min_length=1)
    language: Literal["en", "tr"]
    plan: str = Field(min_length=1)

    @model_validator(mode="after")
    def require_image(self) -> "StartRequest":
        if not self.images():
            raise ValueError("imageBase64s or imageBase64 must contain at least one image")
        return self

    def images(self) -> tuple[str, ...]:
        """Non-empty multi-image entries win; the legacy single-image field is the fallback."""
        many = tuple(img for img in self.image_base64s or () if img)
        match (many, self.image_base64):
            case ((_, *_), _):
                return many
            case (_, str() as one) if one:
                return (one,)
            case _:
                return ()

    def to_request(self) -> AnalysisRequest:
        return AnalysisRequest(
            images=self.images(),
            category=self.category,
            language=self.language,
            plan=self.plan,
        )


class StartResponse(BaseModel):
    jobId: str


def get_job_api(request: Request) -> JobAPI:
    api: JobAPI | None = getattr(request.app.state, "job_api", None)
    if api is None:
        raise HTTPException(status_code=500, detail="Job API unavailable")
    return api


async def _sweep_forever(store: JobStore, interval: int) -> None:
    while True:
        await asyncio.sleep(interval)
        store.sweep()


def create_app(config: Config, gateway: ModelGateway | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        store = JobStore(ttl_seconds=config.job_ttl_seconds)
        model = gateway or HttpModelGateway(config.llm_endpoint, timeout=config.llm_timeout)
        job_api = JobAPI(store, AnalysisOrchestrator(store, model))
        app.state.job_store = store
        app.state.job_api = job_api

        sweeper = (
            asyncio.create_task(_sweep_forever(store, config.sweep_interval))
            if config.sweep_interval > 0
            else None
        )
        try:
            yield
        finally:
            match sweeper:
                case None:
                    pass
                case task:
                    task.cancel()
            await job_api.close()

    app = FastAPI(title=API_TITLE, version=API_VERSION, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def health() -> dict[str, str]:
        return {"status": "ok", "message": HEALTH_MESSAGE}

    @app.post("/api/analysis/start", response_model=StartResponse)
    async def start(body: StartRequest, api: JobAPI = Depends(get_job_api)) -> dict[str, str]:
        try:
            request = body.to_request()
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return await api.start(request)

    @app.get("/api/analysis/status")
    async def status(
        job_id: str = Query(alias="jobId", min_length=1),
        api: JobAPI = Depends(get_job_api),
    ) -> dict[str, Any]:
        return api.status(job_id)

    return app
