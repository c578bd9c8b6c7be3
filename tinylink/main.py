from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tinylink.api import health, links, redirect, stats
from tinylink.core.config import APP_NAME, APP_VERSION, CORS_ORIGINS
from tinylink.core.errors import register_exception_handlers
from tinylink.core.logging_config import setup_logging
from tinylink.db.init_db import init_db

setup_logging()

app = FastAPI(
    title=f"{APP_NAME} API",
    description="Create short links, redirect visitors and count their clicks.",
    version=APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# The redirect router catches every /{code}, so it goes last
app.include_router(health.router)
app.include_router(links.router)
app.include_router(stats.router)
app.include_router(redirect.router)


@app.get("/")
async def root():
    return {"message": f"Welcome to {APP_NAME}"}


@app.on_event("startup")
async def startup_event():
    init_db()
