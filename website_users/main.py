# website_users/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from website_users.api.users import router as users_router
from website_users.core.config import settings
from website_users.core.db import Base, engine

import website_users.models

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Website Users")

# Include routers
app.include_router(users_router)

@app.on_event("startup")
def on_startup():
    # Create DB tables (simple auto-create, no migrations)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))

@app.get("/health")
async def health():
    return {"status": "ok"}

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
