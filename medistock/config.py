from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Uygulama ayarlari.
    Degerler .env dosyasindan okunur. .env dosyasi yoksa default degerler kullanilir.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Veritabani baglanti adresi (sql backend ve urun varyanti icin)
    DATABASE_URL: str = "sqlite:///./medistock.db"

    # Uygulama
    APP_NAME: str = "MediStock"
    DEBUG: bool = False

    # Loglama seviyesi (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    LOG_LEVEL: str = "INFO"

    # Hareket defterinin saklanacagi yer: "sql" veya "json"
    STORAGE_BACKEND: str = "sql"
    JSON_STORE_PATH: str = "data/medistock_movements.json"

    # Dashboard: bu degerin altindaki lotlar "dusuk stok" sayilir
    LOW_STOCK_THRESHOLD: int = 10

    # Rate limit (slowapi formatinda)
    RATE_LIMIT_DEFAULT: str = "120/minute"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WRITE: str = "30/minute"

    # Excel/CSV disa aktarma dosya adi (uzantisiz)
    EXPORT_FILENAME: str = "medistock_hareket_raporu"


# Tek bir settings nesnesi olustur, her yerde bunu kullan
settings = Settings()
