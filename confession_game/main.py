# confession_game/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from confession_game.api.routes import (
    confirm_routes,
    frame_routes,
    payment_routes,
    root_routes,
)
from confession_game.core.config import settings
from confession_game.core.startup import shutdown_event, startup_event

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Never Have I Ever")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_routes.router)
app.include_router(frame_routes.router, prefix="/api")
app.include_router(payment_routes.router, prefix="/api/prompts")
app.include_router(confirm_routes.router)

@app.on_event("startup")
async def app_startup():
    await startup_event(app)


@app.on_event("shutdown")
async def app_shutdown():
    await shutdown_event(app)
