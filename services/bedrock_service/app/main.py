"""Bedrock service main module.

Startup loads AWS settings and probes every model variant before the app
serves traffic; missing credentials abort startup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import HOST, LOG_LEVEL, PORT, SERVICE_FEATURES, SERVICE_NAME, SERVICE_VERSION, load_settings
from .logic.client import BedrockInvoker
from .logic.generator import FallbackGenerator
from .logic.registry import ModelRegistry
from .routers import bedrock
from .schemas.bedrock import HealthResponse, ServiceInfo

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Bedrock Service...")
    settings = load_settings()
    invoker = BedrockInvoker(settings)
    registry = ModelRegistry()
    registry.probe_all(invoker, timeout=settings.probe_timeout)

    app.state.registry = registry
    app.state.generator = FallbackGenerator(registry, invoker, timeout=settings.generation_timeout)
    logger.info("Bedrock Service ready with models: %s", registry.list_available_names())
    yield


app = FastAPI(title="Bedrock Serving Layer", version=SERVICE_VERSION, lifespan=lifespan)
app.include_router(bedrock.router)


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": "Invalid request body"})


def get_registry(request: Request) -> ModelRegistry:
    return request.app.state.registry


@app.get("/", response_model=ServiceInfo)
def root():
    return ServiceInfo(
        message="Bedrock Service is running",
        version=SERVICE_VERSION,
        features=SERVICE_FEATURES,
    )


@app.get("/health", response_model=HealthResponse)
def health(registry: ModelRegistry = Depends(get_registry)):
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        available_models=registry.list_available_names(),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
