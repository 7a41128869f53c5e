import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.core.config import settings
from marketplace.core.database import create_tables
from marketplace.core.errors import register_exception_handlers
from marketplace.routers import auth_router, user_router, freelancer_router, client_router

# --- 匯入所有 Model 檔案 ---
# 在應用程式啟動時被 SQLAlchemy 註冊。
from marketplace.models import user
from marketplace.models import freelancer_profile
from marketplace.models import client_profile


logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables()
        logger.info("Database tables ensured")
    yield


app = FastAPI(title="Freelance Marketplace API", lifespan=lifespan)

# --- 設定 CORS (前端 React 表單) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"status": "success", "message": "Index route working!"}

# --- 載入 API 路由 ---
app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(freelancer_router.router)
app.include_router(client_router.router)
