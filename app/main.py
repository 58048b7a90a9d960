import logging
from contextlib import asynccontextmanager

# Log configuration (before other imports)
# ruff: noqa: E402
from app.config import load_settings

settings = load_settings()

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from app.api.base import api_router  # noqa: E402
from app.infra.supabase.client import StoreHandle  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = StoreHandle(settings)
    await store.initialize()
    app.state.store = store
    logger.info("Amora backend started")
    try:
        yield
    finally:
        await store.shutdown()


app = FastAPI(
    title="Amora Backend API",
    description="Profile storage and feed API for the Amora dating app",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Specify your frontend URL in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Amora Backend API",
        "docs": "/docs",
        "version": "1.0.0"
    }
