# config.py
import os
from dotenv import load_dotenv

# Load .env from the project root before reading anything
load_dotenv()

TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in TRUE_VALUES


# --- Database ---
DB_NAME = os.getenv("DB_NAME", "store_rating")
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "postgres")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", "5432"))

# libpq conninfo string; DATABASE_URL wins when it is set
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"dbname={DB_NAME} user={DB_USER} password={DB_PASSWORD} host={DB_HOST} port={DB_PORT}",
)
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", "1"))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", "10"))
INIT_DB_ON_STARTUP = _env_bool("INIT_DB_ON_STARTUP", "1")

# --- Auth (JWT) ---
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change_me_store_rating_secret")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24)))  # 24h
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

# --- HTTP ---
API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip()] or ["*"]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
