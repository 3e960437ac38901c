from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    secret_key: str = "dev-secret-change-me"
    database_url: str = "sqlite:///./data/soliton.db"

    # JWT settings
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 8  # 8 hours
    cookie_name: str = "token"

    bcrypt_rounds: int = 12

    # Default admin created by `python -m app.seed`
    seed_admin_email: str = "admin@soliton.com"
    seed_admin_password: str = "admin123"
    seed_admin_name: str = "Admin"

    class Config:
        env_file = ".env"


settings = Settings()
