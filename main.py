from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from extrovertidos.core.backend import BackendClient
from extrovertidos.core.cache import TTLCache
from extrovertidos.core.config import settings
from extrovertidos.core.database import SessionLocal, engine, init_db
from extrovertidos.core.logging import configure_logging
from extrovertidos.endpoints import admin, cache_admin, category, notification
from extrovertidos.middleware.exceptions import global_exception_handler, http_exception_handler, validation_exception_handler
from extrovertidos.middleware.logging import RequestLoggingMiddleware
import logging

configure_logging()
logger = logging.getLogger("extrovertidos.main")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(cache_admin.router, prefix="/admin/cache", tags=["Cache"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])
app.include_router(category.router, prefix="/categories", tags=["Categories"])
app.include_router(notification.router, prefix="/notifications", tags=["Notifications"])

@app.on_event("startup")
async def startup_event():
    init_db()
    app.state.cache = TTLCache.from_settings()
    app.state.backend = BackendClient(SessionLocal)
    logger.info("Cache and backend client initialised")

@app.on_event("shutdown")
async def shutdown_event():
    app.state.cache.clear()
    engine.dispose()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
