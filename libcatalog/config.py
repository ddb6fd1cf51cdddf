import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Uygulama Ayarları
    app_name: str = os.getenv("APP_NAME", "Library Management System")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")

    # Veri dosyası ayarları (çalışma dizinine göre)
    books_file: str = os.getenv("LIBRARY_BOOKS_FILE", "books.txt")
    users_file: str = os.getenv("LIBRARY_USERS_FILE", "users.txt")
    file_encoding: str = os.getenv("LIBRARY_FILE_ENCODING", "utf-8")

    # Günlük ayarları
    log_level: str = os.getenv("LOG_LEVEL", "DEBUG" if debug else "INFO").upper()
    log_format: str = os.getenv("LOG_FORMAT", "%(levelname)s: %(message)s")

    # CLI çıktı modu: plain | json | rich
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain").lower()


settings = Settings()
