from contextlib import asynccontextmanager
from fastapi import FastAPI
from dotenv import load_dotenv
import logging

# Import utilities and configurations
from config import settings
from entity_config import supported_entities
from routes import health, panel
from services.session_store import get_session_store

# Load environment variables (settings read .env too, this covers other os.getenv users)
load_dotenv()

# Logger setup
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Run on startup and shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🔁 Panel ready for {', '.join(supported_entities())} against {settings.API_BASE_URL}")
    yield
    sessions = get_session_store()
    logger.info(f"Dropping {len(sessions)} panel sessions.")
    sessions.clear()

# FastAPI app
app = FastAPI(title=settings.APP_TITLE, lifespan=lifespan)

app.include_router(panel.router)
app.include_router(health.router)

@app.get("/", summary="Service information")
async def root():
    return {"name": settings.APP_TITLE, "entities": supported_entities(), "backend": settings.API_BASE_URL}
