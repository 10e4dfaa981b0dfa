# main.py
import asyncio
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .core.config import LOG_LEVEL, CORS_ORIGINS, RENEWAL_POLL_SECONDS, UPLOAD_DIR
from .database import database, create_tables
from .routers import auth, profile, plan, progress, ai, store, settings, notification, program, post
from .services.renewal import renewal_poller

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Smart Health Tracker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 업로드 이미지는 /uploads 로 서빙
os.makedirs(UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR), name="uploads")

poller_task: asyncio.Task | None = None


@app.on_event("startup")
async def startup():
    global poller_task
    create_tables()
    await database.connect()
    if RENEWAL_POLL_SECONDS > 0:
        poller_task = asyncio.create_task(renewal_poller(RENEWAL_POLL_SECONDS))
    logger.info("Smart Health Tracker started")


@app.on_event("shutdown")
async def shutdown():
    global poller_task
    if poller_task is not None:
        poller_task.cancel()
        poller_task = None
    await database.disconnect()


app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(plan.router)
app.include_router(progress.router)
app.include_router(ai.router)
app.include_router(store.router)
app.include_router(settings.router)
app.include_router(notification.router)
app.include_router(program.router)
app.include_router(post.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("healthtracker.main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
