import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .command_parser import format_hour
from .command_routes import router as command_router
from .core.config import get_settings, parse_working_hours
from .core.responses import ErrorCodes, error_response


settings = get_settings()
app = FastAPI(title="Salon Scheduler")
logger = logging.getLogger(__name__)

logging.getLogger("salon_scheduler").setLevel(settings.log_level.upper())

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(command_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=error_response(
            ErrorCodes.VALIDATION_ERROR,
            "Request data failed validation",
            details={"errors": [err.get("msg") for err in exc.errors()]},
        ),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(ErrorCodes.INTERNAL_ERROR, "Internal server error"),
    )


@app.get("/health")
async def healthcheck():
    start, end = parse_working_hours(settings)
    return {
        "ok": True,
        "timezone": settings.salon_timezone,
        "working_hours": {
            "start": start.strftime("%H:%M"),
            "end": end.strftime("%H:%M"),
            "label": f"{format_hour(start.hour)} - {format_hour(end.hour)}",
        },
    }
