import os
from typing import Optional

from pydantic import BaseModel, Field

from .template import DelimiterPair

VERSION = "1.0.0"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    case_insensitive: bool = True
    token_start: str = Field(default="{%", min_length=1)
    token_end: str = Field(default="%}", min_length=1)
    log_level: Optional[str] = None

    @property
    def delimiter(self) -> DelimiterPair:
        return DelimiterPair(self.token_start, self.token_end)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            case_insensitive=_env_flag("RULES_CASE_INSENSITIVE", True),
            token_start=os.getenv("RULES_TOKEN_START") or "{%",
            token_end=os.getenv("RULES_TOKEN_END") or "%}",
            log_level=os.getenv("RULES_LOG_LEVEL") or None,
        )
