from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "mydb"
    MONGO_COLLECTION: str = "blog"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    LOG_LEVEL: str = "INFO"

    # Listener
    HOST: str = "0.0.0.0"
    PORT: int = 50051

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
