from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "WHMCS Mattermost Notifier"
    debug: bool = False
    log_level: str = "INFO"

    # Shared secret the host sends as X-API-Key (empty = bridge refuses requests)
    bridge_api_key: str = ""

    # Outbound Mattermost API calls
    http_timeout: float = 15
    max_redirects: int = 5
    user_agent: str = "whmcs-mattermost-notifier"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
