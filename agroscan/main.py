import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from agroscan.core.config import LOG_LEVEL, get_cors_origins
from agroscan.core.database import mongodb
from agroscan.routers import users, lands, orders, recommendations, chat, controls

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    await mongodb.connect()
    yield
    await mongodb.disconnect()


app = FastAPI(
    title="AgroScan API",
    description="Soil advisory, land records and AI chat for farmers",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(lands.router)
app.include_router(orders.router)
app.include_router(orders.admin_router)
app.include_router(recommendations.router)
app.include_router(chat.router)
app.include_router(controls.router)

@app.get("/")
async def root():
    return {
        "message": "AgroScan API - Soil Advisory and Farm Assistant",
        "version": "1.0.0",
        "endpoints": {
            "users": "/api/users",
            "lands": "/api/users/{user_id}/lands",
            "orders": "/api/users/{user_id}/orders",
            "recommend": "/recommend",
            "chat": "/chat",
            "controls": "/api/controls"
        }
    }


@app.get("/test")
async def health_check():
    return {"status": "Server is running!"}
