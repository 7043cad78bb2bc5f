import os

from dotenv import load_dotenv

load_dotenv()


def _database_url() -> str:
    url = os.getenv("DATABASE_URL", "sqlite:///jobly.db")
    # Heroku/Railway style URLs are not accepted by SQLAlchemy 2
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


DATABASE_URL = _database_url()

JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me")
JWT_ALG = os.getenv("JWT_ALG", "HS256")
ACCESS_TOKEN_EXPIRE_SECONDS = int(os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", str(60*60*8)))

ADMIN_USERNAME = os.getenv("JOBLY_ADMIN_USERNAME", "")
ADMIN_PASSWORD = os.getenv("JOBLY_ADMIN_PASSWORD", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
