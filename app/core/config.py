from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "ClinicSchedule"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Schedule REST backend
    BACKEND_API_URL: str = "http://localhost:3000/api"
    BACKEND_TIMEOUT_SECONDS: float = 10.0

    # Ticket printing
    PRINT_MINUTES_AFTER_CLINIC_END: int = 10
    PRINT_CONFIG_KEY: str = "print_minutes_after_clinic_end"
    PRINT_CONFIG_REFRESH_SECONDS: int = 300

    class Config:
        case_sensitive = True
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.BACKEND_API_URL = self.BACKEND_API_URL.rstrip("/")

settings = Settings()
