#!/usr/bin/env python3
"""
kind-images - Main Entry Point

This is the thin host adapter that:
1. Loads configuration
2. Initializes modules
3. Serves plugin metadata, the images page and action requests

All business logic is in the modules, following black box principles.
"""

import asyncio
import logging
import shutil
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kindimages.config.provider import ConfigProvider, EnvConfigProvider
from kindimages.errors import KindImagesError
from kindimages.factory import ServiceFactory, Services
from kindimages.logging_config import configure_logging, get_logging_config
from kindimages.modules.api import (
    ActionRequest,
    ActionResponse,
    ErrorResponse,
    HealthResponse,
    Navigation,
    PluginCapabilities,
)
from kindimages.modules.config import get_config
from kindimages.modules.view import ContentResponse, build_overview

# Get configuration
config = get_config()

configure_logging(config.get("log_level"))
logger = logging.getLogger("kindimages.main")

# Configuration provider (centralized config access)
config_provider: ConfigProvider = EnvConfigProvider(config)

# Module instances (initialized at startup)
services: Optional[Services] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    global services

    logger.info("Starting kind images plugin...")
    services = ServiceFactory.build(config_provider)
    logger.info("kind images plugin started successfully")

    yield

    logger.info("Shutting down kind images plugin...")
    services = None


# Create FastAPI application
app = FastAPI(
    title="kind images",
    description="Inspect local docker images and load them into a kind cluster",
    version="1.0.0",
    lifespan=lifespan,
)


def get_services() -> Services:
    """Dependency returning the initialized module bundle."""
    if not services:
        raise HTTPException(503, "Service not initialized")
    return services


def render_overview(svc: Services) -> ContentResponse:
    """Read both inventories and build the page. Blocks on external commands."""
    snapshot = svc.inventory.snapshot()
    return build_overview(snapshot, loading=svc.actions.is_loading())


# Plugin registration


@app.get("/plugin", response_model=PluginCapabilities)
async def plugin_capabilities():
    """Registration metadata: plugin name, description and handled actions."""
    return PluginCapabilities()


@app.get("/navigation", response_model=Navigation)
async def navigation():
    return Navigation()


# Content


@app.get("/images", response_model=ContentResponse)
async def images_overview(svc: Services = Depends(get_services)):
    """
    Render the "Local Images" page.

    Every request queries docker and the kind node afresh. A failed query
    shows up as an error banner next to an empty table.
    """
    return await asyncio.to_thread(render_overview, svc)


# Actions


@app.post(
    "/actions",
    response_model=ActionResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def handle_action(request: ActionRequest, svc: Services = Depends(get_services)):
    """
    Perform a load or delete action.

    Returns:
        200: Action completed
        400: Unknown action
        409: A load is already in progress
        422: imageID missing or malformed
        502: The external command failed
        504: The external command timed out
    """
    logger.info(f"Handling action {request.action_name}")
    image_id = await asyncio.to_thread(
        svc.actions.handle_action, request.action_name, request.payload
    )
    return ActionResponse(action=request.action_name, image_id=image_id)


# Health


@app.get("/healthz")
async def healthz():
    """
    Minimal health check endpoint for readiness/liveness probes.

    Returns:
        200: Service is running
    """
    return {"status": "ok"}


@app.get("/health", response_model=HealthResponse)
async def health_check(svc: Services = Depends(get_services)):
    """
    Health check reporting whether the external tools can be found.

    Returns:
        200: healthy when docker and kind are on PATH, degraded otherwise
    """
    tools = {
        svc.tools.docker_bin: shutil.which(svc.tools.docker_bin) is not None,
        svc.tools.kind_bin: shutil.which(svc.tools.kind_bin) is not None,
    }
    return HealthResponse(
        status="healthy" if all(tools.values()) else "degraded",
        loading=svc.actions.is_loading(),
        tools=tools,
    )


# Error handlers


@app.exception_handler(KindImagesError)
async def kind_images_error_handler(request: Request, exc: KindImagesError):
    """Map service errors to their HTTP status."""
    logger.warning(f"{type(exc).__name__}: {exc.message}")
    body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies in the common error shape."""
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.warning(f"Invalid request to {request.url.path}: {detail}")
    body = ErrorResponse(error="RequestValidationError", detail=detail)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(ValueError)
async def validation_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    logger.error(f"Validation error: {exc}")
    return JSONResponse(status_code=400, content={"error": "ValueError", "detail": str(exc)})


def main():
    """Main entry point."""
    uvicorn.run(
        "kindimages.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level")),
    )


if __name__ == "__main__":
    main()
