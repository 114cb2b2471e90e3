from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from src.constants import (
    DEFAULT_JOB_TTL_SECONDS,
    DEFAULT_LLM_ENDPOINT,
    DEFAULT_SWEEP_INTERVAL_SECONDS,
)


@dataclass(frozen=True)
class Config:
    llm_endpoint: str
    llm_timeout: Optional[float]
    job_ttl_seconds: int
    sweep_interval: int
    log_level: str
    host: str
    port: int
    cors_origins: tuple[str, ...]

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        endpoint = os.getenv("LLM_ENDPOINT", DEFAULT_LLM_ENDPOINT).strip()
        raw_timeout = os.getenv("LLM_TIMEOUT", "").strip()
        ttl = os.getenv("JOB_TTL_SECONDS", str(DEFAULT_JOB_TTL_SECONDS))
        sweep = os.getenv("JOB_SWEEP_INTERVAL", str(DEFAULT_SWEEP_INTERVAL_SECONDS))
        log_level = os.getenv("LOG_LEVEL", "INFO")
        host = os.getenv("HOST", "0.0.0.0")
        port = os.getenv("PORT", "8000")
        raw_origins = os.getenv("CORS_ORIGINS", "*")

        origins = tuple(o.strip() for o in raw_origins.split(",") if o.strip())

        return cls._validate(
            llm_endpoint=endpoint,
            llm_timeout=float(raw_timeout) if raw_timeout else None,
            job_ttl_seconds=int(ttl),
            sweep_interval=int(sweep),
            log_level=log_level,
            host=host,
            port=int(port),
            cors_origins=origins or ("*",),
        )

    @staticmethod
    def _validate(
        llm_endpoint: str,
        llm_timeout: Optional[float],
        job_ttl_seconds: int,
        sweep_interval: int,
        log_level: str,
        host: str,
        port: int,
        cors_origins: tuple[str, ...],
    ) -> "Config":
        match llm_endpoint:
            case "":
                raise ValueError("LLM_ENDPOINT must not be empty")
            case _:
                pass

        match llm_timeout:
            case float() as t if t <= 0:
                raise ValueError("LLM_TIMEOUT must be positive when set")
            case _:
                pass

        match job_ttl_seconds:
            case n if n <= 0:
                raise ValueError("JOB_TTL_SECONDS must be positive")
            case _:
                pass

        match sweep_interval:
            case n if n < 0:
                raise ValueError("JOB_SWEEP_INTERVAL must be 0 (disabled) or positive")
            case _:
                pass

        return Config(
            llm_endpoint=llm_endpoint,
            llm_timeout=llm_timeout,
            job_ttl_seconds=job_ttl_seconds,
            sweep_interval=sweep_interval,
            log_level=log_level,
            host=host,
            port=port,
            cors_origins=cors_origins,
        )
