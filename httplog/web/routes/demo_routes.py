"""
Demo routes: success, locally handled error and escalated error
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from httplog.core.logging import AppLogger
from httplog.web import handlers
from httplog.web.dependencies import get_app_logger
from httplog.web.results import resolve

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def index(request: Request, app_logger: AppLogger = Depends(get_app_logger)) -> Response:
    """Greeting"""
    return await resolve(request, handlers.index, app_logger)


@router.get("/boom", response_class=PlainTextResponse)
async def boom(request: Request, app_logger: AppLogger = Depends(get_app_logger)) -> Response:
    """
    Error caught and logged inside the handler

    Always answers 500 without going through the error pipeline.
    """
    return await resolve(request, handlers.boom, app_logger)


@router.get("/errorhandler", response_class=PlainTextResponse)
async def errorhandler(request: Request, app_logger: AppLogger = Depends(get_app_logger)) -> Response:
    """
    Error escalated to the error pipeline

    The pipeline logs the error, then answers 500.
    """
    return await resolve(request, handlers.escalate, app_logger)
