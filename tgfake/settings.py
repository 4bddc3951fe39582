import os

from dotenv import load_dotenv

load_dotenv()


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _parse_optional_int(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


class FakeBotSettings:
    def __init__(self, _env_prefix: str = "TGFAKE_") -> None:
        self.token = os.environ.get(f"{_env_prefix}BOT_TOKEN", "123456:TEST-TOKEN")
        self.username = os.environ.get(f"{_env_prefix}BOT_USERNAME", "TestBot")
        self.fail_when_empty = _parse_bool(
            os.environ.get(f"{_env_prefix}FAIL_WHEN_EMPTY", "")
        )


class PayloadSettings:
    def __init__(self, _env_prefix: str = "TGFAKE_") -> None:
        self.seed = _parse_optional_int(os.environ.get(f"{_env_prefix}SEED", ""))


class Settings:
    log_level = os.environ.get("TGFAKE_LOG_LEVEL", "WARNING").upper()

    bot: FakeBotSettings = FakeBotSettings()
    payloads: PayloadSettings = PayloadSettings()


se = Settings()
