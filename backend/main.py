import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from core.config import settings
from core.database import create_db_and_tables
from core.exceptions import AppError
from core.logging import setup_logging
from contextlib import asynccontextmanager
from routes import admin, auth, complaints, reference, supervisor

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    create_db_and_tables()
    yield

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(auth.router, prefix="/auth")
app.include_router(complaints.router, prefix="/complaints")
app.include_router(admin.router, prefix="/admin")
app.include_router(supervisor.router, prefix="/supervisor")
app.include_router(reference.router, prefix="/reference")

@app.get("/", tags=["Test"])
def root():
    return {"message": "Tenant Maintenance Tracker API running"}
