"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.
"""

from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Base de données (fichier SQLite local par défaut, application mono-utilisateur)
    DATABASE_URL: str = "sqlite:///./coursetrack.db"

    # Stockage des enregistrements : "sql" (table de documents) ou "memory" (maquette, perdu à l'arrêt)
    STORAGE_BACKEND: str = "sql"

    # Fuseau horaire utilisé pour le calendrier et le comptage des cours du mois
    TIMEZONE: str = "UTC"

    # Journalisation
    LOG_LEVEL: str = "INFO"

    # Environnement
    ENV: str = "development"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def tz(self) -> ZoneInfo:
        """Fuseau horaire local de l'école (calendrier, séances du mois)."""
        return ZoneInfo(self.TIMEZONE)


settings = Settings()
