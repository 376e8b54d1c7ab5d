# app/main.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import os
import logging

from app.api.pull_request import router as pull_request_router
from app.api.statistics import router as statistics_router
from app.api.team import router as team_router
from app.api.user import router as user_router

from app.core.settings import settings
from app.core.exceptions import BaseAppException, ErrorCode
from app.initial_data import init_db
from app.schemas.response import ErrorDetail, ErrorResponse, HealthResponse

# Логирование
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("Reviewers.API")

app = FastAPI(
    title="PR Reviewer Assignment Service",
    version="1.0.0",
    description="Assigns code reviewers to pull requests within teams",
)

# Middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Роутеры
app.include_router(team_router)
app.include_router(user_router)
app.include_router(pull_request_router)
app.include_router(statistics_router)

@app.get("/health", tags=["Health"], response_model=HealthResponse)
def health():
    return HealthResponse()

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting PR Reviewer Assignment Service (env={settings.ENV})")
    init_db()

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Stopping PR Reviewer Assignment Service")

def error_response(status_code: int, code: ErrorCode, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))

@app.exception_handler(BaseAppException)
async def app_exception_handler(request: Request, exc: BaseAppException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.context}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected with {exc.code.value}: {exc.context}")
    return error_response(exc.status_code, exc.code, exc.message)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    location = errors[0]["loc"] if errors else ()
    if location and location[0] == "query":
        message = f"{location[-1]} query parameter is required"
    else:
        message = "invalid request body"
    logger.info(f"{request.method} {request.url.path} rejected: {message}")
    return error_response(400, ErrorCode.NOT_FOUND, message)

@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"{request.method} {request.url.path} database error: {exc}", exc_info=exc)
    return error_response(500, ErrorCode.INTERNAL_ERROR, "internal database error")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8080)),
        reload=settings.DEBUG,
    )
