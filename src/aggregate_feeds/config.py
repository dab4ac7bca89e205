"""Configuration loader for the feed aggregator and its API."""

import logging
from dataclasses import dataclass, field, fields

from dotenv import load_dotenv

from common.config import ConfigSingleton, find_config_path, load_yaml
from common.http import DEFAULT_USER_AGENT

load_dotenv()

logger = logging.getLogger(__name__)

# Topics skipped by title substring: the wire's own "all messages" topic,
# polls, legal notices, security, press releases, communications and youth
DEFAULT_EXCLUDED_TOPICS = [
    "Visi pranešimai",
    "Apklausos",
    "Teisinė informacija",
    "Saugumas",
    "Pranešimai spaudai",
    "Komunikacija",
    "Jaunimas",
]


@dataclass
class FeedsConfig:
    wire_feed_url: str = "https://sc.bns.lt/rss"
    max_items: int = 40
    request_timeout: int = 15
    user_agent: str = DEFAULT_USER_AGENT
    excluded_topics: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_TOPICS))
    cache_ttl_hours: float = 4
    language: str = "lt"
    site_title: str = "pranešimai"
    site_url: str = "https://sc.bns.lt"
    public_url: str = "http://localhost:8000"


@dataclass
class ScraperConfig:
    max_concurrent: int = 2
    min_interval_ms: int = 500
    request_timeout: int = 30
    cache_ttl_days: int = 7
    body_class: str = "sc-item-body"
    logo_class: str = "sc-item-logo"


@dataclass
class ScheduleConfig:
    enabled: bool = True
    refresh_interval_hours: float = 4


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class Config:
    feeds: FeedsConfig = field(default_factory=FeedsConfig)
    scraper: ScraperConfig = field(default_factory=ScraperConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_config(config_name: str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses NEWSWIRE_CONFIG env var or "prod".

    Returns:
        Loaded Config object
    """
    config_path = find_config_path(
        config_name,
        env_var="NEWSWIRE_CONFIG",
        dir_env_var="NEWSWIRE_CONFIG_DIR",
    )
    logger.info("Loading config from %s", config_path)
    return parse_config(load_yaml(config_path))


def parse_config(data: dict) -> Config:
    """Parse config dictionary into Config object, keeping defaults for missing keys."""
    return Config(
        feeds=_parse_section(FeedsConfig, data.get("feeds")),
        scraper=_parse_section(ScraperConfig, data.get("scraper")),
        schedule=_parse_section(ScheduleConfig, data.get("schedule")),
        server=_parse_section(ServerConfig, data.get("server")),
    )


def _parse_section(cls, raw: dict | None):
    raw = raw or {}
    known = {f.name for f in fields(cls)}
    for key in raw:
        if key not in known:
            logger.warning("Ignoring unknown %s key: %s", cls.__name__, key)
    return cls(**{k: v for k, v in raw.items() if k in known})


_manager: ConfigSingleton[Config] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
