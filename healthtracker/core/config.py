from dotenv import load_dotenv
import os

# .env 파일 로드
load_dotenv()

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./healthtracker.db")

# --- Auth ---
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))
PASSWORD_RESET_EXPIRE_MINUTES = int(os.getenv("PASSWORD_RESET_EXPIRE_MINUTES", 10))
MAX_LOGIN_ATTEMPTS = int(os.getenv("MAX_LOGIN_ATTEMPTS", 5))
LOCKOUT_MINUTES = int(os.getenv("LOCKOUT_MINUTES", 120))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

# --- AI Completion API ---
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
AZURE_OPENAI_ENDPOINT = os.getenv("AZURE_OPENAI_ENDPOINT")
AZURE_OPENAI_API_VERSION = os.getenv("AZURE_OPENAI_API_VERSION", "2024-06-01")
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", 60))

# --- AI Relay (backend proxy) ---
AI_RELAY_URL = os.getenv("AI_RELAY_URL")
AI_RELAY_TOKEN = os.getenv("AI_RELAY_TOKEN")
AI_RELAY_TIMEOUT = float(os.getenv("AI_RELAY_TIMEOUT", 60))

# --- Plans ---
DEFAULT_TOTAL_WEEKS = int(os.getenv("DEFAULT_TOTAL_WEEKS", 12))
RENEWAL_POLL_SECONDS = float(os.getenv("RENEWAL_POLL_SECONDS", 0))

# --- Store ---
CHECKOUT_DELAY_SECONDS = float(os.getenv("CHECKOUT_DELAY_SECONDS", 2))

# --- Community uploads ---
UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "uploads")))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", 5 * 1024 * 1024))
