import os
from pathlib import Path
BASE_DIR = Path(__file__).resolve().parent

class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", f"sqlite:///{(BASE_DIR / 'school.db').as_posix()}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    PAGE_SIZE = int(os.environ.get("PAGE_SIZE", "20"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    PAGE_SIZE = 20
    LOG_LEVEL = "WARNING"
