from pydantic_settings import BaseSettings, SettingsConfigDict


class LaspadUiConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LASPAD_UI_")

    server_url: str = "http://127.0.0.1:51823"

    poll_endpoint: str = "/get_msg"
    branches_endpoint: str = "/get_branches"
    # "" selects the legacy one-branch-per-character split.
    branch_delimiter: str = "\n"

    busy_appearance: str = "grey"
    color: bool = True

    health_timeout_seconds: float = 2.0
    log_file: str = ""
