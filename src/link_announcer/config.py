from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
import yaml
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_TLD_PATH = DATA_DIR / "tlds.txt"
HTTP_REASONS_PATH = DATA_DIR / "http_reasons.yaml"

# Lists shorter than this are treated as broken and replaced by the bundled one
MIN_TLD_ENTRIES = 7

class Settings(BaseSettings):
    SLACK_BOT_TOKEN: str = Field("", description="Slack Bot User OAuth Token")
    SLACK_APP_TOKEN: str = Field("", description="Slack App-Level Token (for Socket Mode)")
    URL_CHANNEL_IDS: str = Field("", description="Comma separated channel IDs to watch (empty = all)")
    LOG_LEVEL: str = "INFO"

    URL_SHORTENER: str = Field("passthrough", description="Registered shortener name")
    URL_DETECT_SCHEMELESS: bool = Field(False, description="Also match bare domains like example.com")
    URL_BASE_FORMAT: str = Field("%message%", description="Outer message template")
    URL_MESSAGE_FORMAT: str = Field("[ %link% ] %title%", description="Per-link template")
    URL_MERGE_LINKS: bool = Field(True, description="Send one message for all links in a line")
    URL_TITLE_LENGTH: int = Field(40, description="Max title length (<= 0 disables truncation)")
    URL_SHOW_ERRORS: bool = Field(True, description="Show HTTP error reasons as the title")
    URL_EXPIRE_SECONDS: int = Field(1800, description="Repeat suppression window (<= 0 never expires)")
    URL_CACHE_LIMIT: int = Field(10, description="Cached links per channel (<= 0 unbounded)")
    URL_SSL_FALLBACK: bool = Field(True, description="Downgrade https to http without TLS support")
    URL_TLD_PATH: Optional[str] = Field(None, description="Newline-delimited TLD list")

    URL_FETCH_TIMEOUT: float = 3.5
    URL_USER_AGENT: str = "Mozilla/5.0 (compatible; LinkAnnouncer/1.0; +chat link titles)"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def channel_ids(self) -> List[str]:
        return [c.strip() for c in self.URL_CHANNEL_IDS.split(",") if c.strip()]

@lru_cache()
def get_settings() -> Settings:
    return Settings()

def _read_tlds(path: Path) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        lines = (line.strip().lower() for line in f)
        return [line for line in lines if line and not line.startswith("#")]

def load_tld_list(path: Optional[str] = None) -> FrozenSet[str]:
    """
    Load the known-TLD set once at startup.
    Falls back to the bundled list if the configured one is missing or too short.
    """
    tlds: List[str] = []
    if path and Path(path).exists():
        tlds = _read_tlds(Path(path))
    if len(tlds) < MIN_TLD_ENTRIES:
        tlds = _read_tlds(DEFAULT_TLD_PATH)
    return frozenset(tlds)

def load_http_reasons() -> Dict[int, str]:
    if not HTTP_REASONS_PATH.exists():
        return {}
    with open(HTTP_REASONS_PATH, "r") as f:
        data = yaml.safe_load(f) or {}
    return {int(code): str(reason) for code, reason in data.items()}
