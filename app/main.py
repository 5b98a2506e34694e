from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
from sqlalchemy import text
from app.config import settings
from app.database.connection import close_db, engine
from app.controllers.auth_controller import router as auth_router
from app.controllers.property_controller import router as property_router
from app.controllers.enquiry_controller import router as enquiry_router
from app.controllers.page_controller import router as page_router
from app.controllers.user_controller import router as user_router
from app.controllers.upload_controller import router as upload_router
from app.controllers.admin_controller import router as admin_router
from app.utils.error_handlers import register_exception_handlers
import logging
import time

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all incoming requests"""
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        # Log important headers only; tokens are cut short
        headers_to_log = {}
        for header in ["authorization", "content-type", "user-agent", "origin"]:
            if header in request.headers:
                value = request.headers[header]
                if header == "authorization" and len(value) > 20:
                    value = value[:20] + "..."
                headers_to_log[header] = value

        logger.info(f"Request: {request.method} {request.url.path} from {client_ip}")
        if headers_to_log:
            logger.debug(f"Headers: {headers_to_log}")

        if request.method in ["POST", "PUT", "PATCH"]:
            content_type = request.headers.get("content-type", "")
            content_length = request.headers.get("content-length", "unknown")
            logger.debug(f"Body: Content-Type={content_type}, Length={content_length}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(f"Response: {response.status_code} for {request.method} {request.url.path} ({process_time:.3f}s)")

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Test database connection on startup without failing startup
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
    except Exception as e:
        logger.warning(f"Database connection failed on startup: {str(e)}")
        logger.warning("App will continue, but database-dependent features may not work")

    yield

    try:
        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database: {str(e)}")


app = FastAPI(
    title="EstateDesk API",
    description="Property listings, moderation and enquiries for a real-estate site",
    version="1.0.0",
    lifespan=lifespan
)

# Add request logging middleware first (runs before CORS)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(property_router)
app.include_router(enquiry_router)
app.include_router(page_router)
app.include_router(user_router)
app.include_router(upload_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    return {"message": "EstateDesk API", "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
