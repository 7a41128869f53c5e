# marketplace/core/config.py
# 應用程式設定 (資料庫連線字串、JWT 秘鑰、搜尋上限等)
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 資料庫設定 (需為 async driver, e.g. mysql+aiomysql://...)
    DATABASE_URL: str
    # (可選) 在 console 印出 SQL 語句
    DB_ECHO: bool = False
    # 啟動時自動建立資料表
    CREATE_TABLES_ON_STARTUP: bool = True

    # JWT 設定
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    # 存取令牌過期時間（分鐘）
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # 前端 (React 表單) 的來源
    CORS_ORIGINS: List[str] = ["*"]

    # 工作者搜尋結果上限 (無分頁)
    SEARCH_RESULT_LIMIT: int = 20

    LOG_LEVEL: str = "INFO"

    # 環境變數檔案
    class Config:
        env_file = ".env"

# 建立設定實例
settings = Settings()
