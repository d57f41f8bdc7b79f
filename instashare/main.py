# instashare/main.py
import logging
import os

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from instashare.db.mongo import init_db_indexes
from instashare.services.socket_manager import sio, SOCKETIO_PATH
from instashare.utils.errors import register_error_handlers
from instashare.utils.logger import setup_logging

# Routers
from instashare.routes.auth import router as auth_router
from instashare.routes.user import router as user_router
from instashare.routes.post import router as post_router
from instashare.routes.message import router as message_router

setup_logging(os.getenv("LOG_LEVEL", "INFO"), os.getenv("LOG_FORMAT", "json"))
logger = logging.getLogger(__name__)

# ---------------------------
# Build FastAPI app
# ---------------------------
fastapi_app = FastAPI(title="InstaShare Backend", version="1.0.0")

# CORS: wide open for now
fastapi_app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(fastapi_app)


@fastapi_app.get("/health")
async def health_check():
    return {"status": "OK", "message": "InstaShare backend is running."}


@fastapi_app.get("/")
async def root():
    return {"message": "Welcome to the InstaShare backend!"}


# ---------------------------
# Routers
# ---------------------------
fastapi_app.include_router(auth_router)
fastapi_app.include_router(user_router)
fastapi_app.include_router(post_router)
fastapi_app.include_router(message_router)


# ---------------------------
# Startup tasks
# ---------------------------
@fastapi_app.on_event("startup")
async def on_startup():
    try:
        await init_db_indexes()
    except Exception:
        # Don't crash the app if indexes fail; just log it
        logger.exception("Index init error")


# ---------------------------
# Final ASGI app export: Socket.IO wraps FastAPI
# ---------------------------
app = socketio.ASGIApp(sio, other_asgi_app=fastapi_app, socketio_path=SOCKETIO_PATH.lstrip("/"))
