from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive = False, # Make environment variable names case-insensitive
        env_file = ".env", # Load environment variables from .env file, if available
        extra = "ignore", # Ignore any extra fields not defined in the model
    )

    # All env vars should be declared manually, never assume automatic behavior
    # Apart from constants or required env vars, you should verify the values exist at runtime
    app_env: str = Field(validation_alias="APP_ENV", pattern=r'^(development|production)$', default="development")

    # Database Connection String, required when the server process starts
    student_mongo_url: Optional[str] = Field(validation_alias="STUDENT_MONGO_URL", default=None)

    # Server process
    host: str = Field(validation_alias="HOST", default="127.0.0.1")
    port: int = Field(validation_alias="PORT", default=5000)
    log_level: str = Field(validation_alias="LOG_LEVEL", default="INFO")
    # Comma separated list of front-end origins allowed to call the API
    cors_origins: str = Field(validation_alias="CORS_ORIGINS", default="http://localhost:5173")

    # Client side, where the form and dashboard send their requests
    student_api_url: str = Field(validation_alias="STUDENT_API_URL", default="http://localhost:5000/api")

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

settings = Settings()

# MongoDB
MONGO_DATABASE_NAME = "student_registration"
STUDENTS_COLLECTION = "students"
