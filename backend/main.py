import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import settings
from core.errors import InventoryError
from db.database import create_db_and_tables
from routers.images import router as images_router
from routers.inventory import router as inventory_router
from routers.scan import router as scan_router
from routers.stats import router as stats_router


# LOGGING CONFIGURATION

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_db_and_tables()
    yield


app = FastAPI(
    title="Inventory API",
    description="Items, stock adjustments, QR links and low-stock statistics",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def inventory_error_handler(request: Request, exc: InventoryError):
    logger.warning(
        "%s %s failed: %s (%s)",
        request.method, request.url.path, exc.code, exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.add_exception_handler(InventoryError, inventory_error_handler)


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        "%s %s Status: %s Time: %sms",
        request.method, request.url.path, response.status_code, duration,
    )

    return response


app.include_router(inventory_router, prefix="/items", tags=["items"])
app.include_router(stats_router, prefix="/stats", tags=["stats"])
app.include_router(scan_router, prefix="/scan", tags=["scan"])

# Image upload routes
app.include_router(images_router, prefix="/images", tags=["images"])


@app.get("/")
def root():
    return {"message": "Inventory API is running"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
