import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Read once at start-up; no reload."""

    def __init__(self):
        self.SECRET_KEY = os.getenv("FLASK_SECRET", "dev-secret")
        # unset or empty -> history disabled, calculation still served
        self.DATABASE_URI = os.getenv("DATABASE_URI") or None

        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.PORT = int(os.getenv("PORT", "5000"))

        self.CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
