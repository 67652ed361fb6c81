from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file="econbot/.env",
        env_file_encoding="utf-8",
        extra="allow",
    )
    # Application
    APP_NAME: str = "Economy Bot"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./economy.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # Rob
    ROB_MAX_STEAL: int = 100  # 성공 시 최대 탈취 금액
    ROB_PENALTY: int = 50  # 실패 시 대상에게 지급하는 벌금
    ROB_SUCCESS_RATE: float = 0.5

    # Blackjack
    DEALER_STAND_TOTAL: int = 17  # 딜러는 이 점수 이상이면 멈춤 (soft 17 구분 없음)
    BLACKJACK_WIN_MULTIPLIER: int = 2  # 승리 시 총 지급 배수 (베팅 포함)

    # Leaderboard
    LEADERBOARD_LIMIT: int = 10


settings = Settings()

