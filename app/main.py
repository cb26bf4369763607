from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config.database import ensure_indexes
from app.config.logging_config import setup_logging
from app.middleware.cors import setup_cors
from app.routes import (
    auth_routes,
    message_routes,
    notification_routes,
    question_routes,
    ui_routes,
    user_routes,
    websocket_routes,
)

log = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await ensure_indexes()
    log.info("Community Overflow started")
    yield


app = FastAPI(title="Community Overflow", version="1.0", lifespan=lifespan)

# Setup CORS
setup_cors(app)

# Include all route modules
app.include_router(auth_routes.router)
app.include_router(user_routes.router)
app.include_router(message_routes.router)
app.include_router(question_routes.router)
app.include_router(notification_routes.router)
app.include_router(ui_routes.router)
app.include_router(websocket_routes.router)


@app.get("/")
def root():
    return {"message": "Community Overflow backend is running"}


if __name__ == "__main__":
    import uvicorn
    from app.config.settings import settings

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
