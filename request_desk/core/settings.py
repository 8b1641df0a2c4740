from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Key-value storage
    DATABASE_URL: str = "sqlite:///./request_desk.db"
    STORAGE_KEY: str = "ipt_demo_v1"
    SESSION_KEY: str = "auth_token"
    PENDING_VERIFICATION_KEY: str = "unverified_email"

    # Create the key-value table on startup if missing.
    AUTO_DB_BOOTSTRAP: bool = True

    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
