import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SECRET_KEY = "collabmate-dev-secret"


class Settings:
    PROJECT_NAME = os.getenv("PROJECT_NAME", "CollabMate")
    DB_URL = os.getenv("DB_URL", "sqlite:///./collabmate.db")
    SECRET_KEY = os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY)
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "360"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    API_PREFIX = os.getenv("API_PREFIX", "/api")

    @property
    def using_default_secret(self) -> bool:
        return self.SECRET_KEY == DEFAULT_SECRET_KEY


settings = Settings()
