from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .settings import get_settings
from .routers import tasks as tasks_router

openapi_tags = [
    {"name": "tasks", "description": "Create, list, update and delete colored tasks."},
]

app = FastAPI(
    title="Task Backend",
    description="Backend API service for managing colored tasks.",
    version="0.1.0",
    openapi_tags=openapi_tags,
)

_settings = get_settings()

# An empty origin list means the same as '*'
_origins = [o for o in _settings.cors_allow_origins if o != "*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins if _origins and "*" not in _settings.cors_allow_origins else ["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report request validation errors as 400 with the offending fields.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Fallback for anything the route handlers did not translate themselves.

    Starlette re-raises the exception after this response is sent, so the
    traceback is logged once by the server; nothing is logged here.
    """
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "InternalServerError", "message": "Internal server error"},
    )


app.include_router(tasks_router.router)
