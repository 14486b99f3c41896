from dotenv import load_dotenv
import os

load_dotenv()  # reads .env when present

DATABASE_URL = os.getenv("DATABASE_URL")
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin User")
STUDENT_USERNAME = os.getenv("STUDENT_USERNAME", "student")
STUDENT_EMAIL = os.getenv("STUDENT_EMAIL")
STUDENT_PASSWORD = os.getenv("STUDENT_PASSWORD")
STUDENT_NAME = os.getenv("STUDENT_NAME", "John Student")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000")
CORS_ORIGIN_REGEX = os.getenv("CORS_ORIGIN_REGEX")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

def parse_cors_origins(value: str):
    if not value:
        return []
    if value.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]
