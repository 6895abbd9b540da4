# config.py
"""
Application settings.

Values come from the environment (optionally a .env file loaded with
python-dotenv). Use ``get_settings()`` rather than building ``Settings``
directly so every module shares one instance.
"""
import os
from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load .env
load_dotenv()


def _as_bool(value: Optional[str], default: bool = False) -> bool:
     if value is None:
          return default
     return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
     """Snapshot of the environment at first access."""

     def __init__(self) -> None:
          self.app_name = os.getenv("APP_NAME", "SmartRent API")
          self.debug = _as_bool(os.getenv("DEBUG"))
          self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

          # Database
          self.database_url = os.getenv("DATABASE_URL") or self._build_mssql_url()
          self.sql_echo = _as_bool(os.getenv("SQL_ECHO"))

          # Auth
          self.auth_provider = os.getenv("AUTH_PROVIDER", "local").lower()  # local, firebase
          self.jwt_secret = os.getenv("JWT_SECRET", "change-me")
          self.jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
          self.access_token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
          self.google_application_credentials = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

          # Stripe
          self.stripe_secret_key = os.getenv("STRIPE_SECRET_KEY")
          self.stripe_webhook_secret = os.getenv("STRIPE_WEBHOOK_SECRET")
          self.stripe_currency = os.getenv("STRIPE_CURRENCY", "usd").lower()

          # HTTP
          self.cors_origins: List[str] = [
               origin.strip()
               for origin in os.getenv("CORS_ORIGINS", "").split(",")
               if origin.strip()
          ]
          self.port = int(os.getenv("PORT", "10000"))

          # Uploads
          self.upload_dir = os.getenv(
               "UPLOAD_DIR",
               os.path.join(os.path.dirname(os.path.abspath(__file__)), "uploads"),
          )
          self.azure_storage_account = os.getenv("AZURE_STORAGE_ACCOUNT")
          self.azure_storage_key = os.getenv("AZURE_STORAGE_KEY")
          self.azure_storage_container = os.getenv("AZURE_STORAGE_CONTAINER", "smartrent")

     @staticmethod
     def _build_mssql_url() -> str:
          """
          Build the Azure SQL (MS SQL Server) URL from the DB_* variables.

          Falls back to a local SQLite file when DB_SERVER is not set.
          """
          server = os.getenv("DB_SERVER")
          if not server:
               return "sqlite:///./smartrent.db"
          user = quote_plus(os.getenv("DB_USER") or "")
          password = quote_plus(os.getenv("DB_PASS") or "")
          port = os.getenv("DB_PORT", "1433")
          name = os.getenv("DB_NAME")
          return f"mssql+pymssql://{user}:{password}@{server}:{port}/{name}"

     @property
     def use_firebase(self) -> bool:
          return self.auth_provider == "firebase"

     @property
     def use_azure_storage(self) -> bool:
          return bool(self.azure_storage_account and self.azure_storage_key)


@lru_cache()
def get_settings() -> Settings:
     return Settings()
