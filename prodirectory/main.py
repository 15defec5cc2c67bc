import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from prodirectory.core.config import settings
from prodirectory.core.logging import setup_logging
from prodirectory.db.init_db import init_db
from prodirectory.api.routes import auth
from prodirectory.api.routes import professionals as professionals_router
from prodirectory.api.routes import ratings as ratings_router
from prodirectory.api.routes import categories as categories_router
from prodirectory.api.routes import users as users_router
from prodirectory.api.routes import recommendations as recommendations_router
from prodirectory.api.routes import system_settings as system_settings_router

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    init_db()


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Request conflicts with existing data"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


@app.get("/")
def root():
    return {"message": f"{settings.APP_NAME} API running"}


app.include_router(auth.router)
app.include_router(professionals_router.router)
app.include_router(ratings_router.router)
app.include_router(categories_router.router)
app.include_router(users_router.router)
app.include_router(recommendations_router.router)
app.include_router(system_settings_router.router)
