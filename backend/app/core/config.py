from dotenv import load_dotenv
import os
from pathlib import Path

load_dotenv()  # Load variables from .env

BACKEND_DIR = Path(__file__).resolve().parents[2]

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json").strip().lower()
DATA_DIR = Path(os.getenv("DATA_DIR", BACKEND_DIR / "data"))
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{(BACKEND_DIR / 'data' / 'tasks.db').as_posix()}")
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
CORS_ORIGIN_REGEX = os.getenv("CORS_ORIGIN_REGEX", r"^https://.*\.vercel\.app$")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

def parse_cors_origins(value: str):
    """Comma separated origins; trailing slashes dropped, duplicates collapsed."""
    if not value or not value.strip():
        return []
    origins = [origin.strip().rstrip("/") for origin in value.split(",")]
    if "*" in origins:
        return ["*"]
    return list(dict.fromkeys(origin for origin in origins if origin))
