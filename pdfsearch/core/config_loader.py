"""
Configuration loader for the PDF Search Service.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
The PDFSEARCH_CONFIG environment variable points at an explicit file.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError


CONFIG_ENV_VAR = "PDFSEARCH_CONFIG"


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    storage_directory: Path
    logs_directory: Path


@dataclass
class ExtractionConfig:
    """Configuration for PDF extraction settings."""
    primary_backend: str
    fallback_backend: str
    max_file_size_mb: int
    supported_extensions: List[str]


@dataclass
class ElasticsearchConfig:
    """Connection settings for the search backend."""
    hosts: List[str]
    index_name: str
    request_timeout: float
    username: str
    password: str
    verify_certs: bool


@dataclass
class RedisConfig:
    """Connection settings for the shared cache store."""
    url: str
    socket_timeout: float
    key_prefix: str


@dataclass
class SearchConfig:
    """Configuration for query planning and highlighting."""
    page_size: int
    name_boost: float
    tags_boost: float
    fragment_size: int
    number_of_fragments: int
    inner_hits_size: int
    pre_tag: str
    post_tag: str
    track_total_hits: bool
    list_limit: int


@dataclass
class TagsConfig:
    """Configuration for tag extraction."""
    limit: int
    min_length: int


@dataclass
class CacheConfig:
    """Time-to-live policy and history settings for cached responses."""
    search_ttl_seconds: int
    list_ttl_seconds: int
    history_size: int
    suggestion_limit: int


@dataclass
class APIConfig:
    """Configuration for the HTTP surface."""
    title: str
    cors_origins: List[str]


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    extraction: ExtractionConfig
    elasticsearch: ElasticsearchConfig
    redis: RedisConfig
    search: SearchConfig
    tags: TagsConfig
    cache: CacheConfig
    api: APIConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        project_root = config_path.resolve().parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            storage_directory=cls._resolve_path(paths_data.get("storage_directory", "stored_pdfs"), project_root),
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root)
        )

        ext_data = data.get("extraction", {})
        extraction = ExtractionConfig(
            primary_backend=ext_data.get("primary_backend", "pypdf2"),
            fallback_backend=ext_data.get("fallback_backend", "pdfplumber"),
            max_file_size_mb=ext_data.get("max_file_size_mb", 50),
            supported_extensions=ext_data.get("supported_extensions", [".pdf"])
        )

        es_data = data.get("elasticsearch", {})
        hosts = es_data.get("hosts", ["http://localhost:9200"])
        if isinstance(hosts, str):
            hosts = [hosts]
        elasticsearch = ElasticsearchConfig(
            hosts=hosts,
            index_name=es_data.get("index_name", "pdfs"),
            request_timeout=float(es_data.get("request_timeout", 10.0)),
            username=es_data.get("username", ""),
            password=es_data.get("password", ""),
            verify_certs=es_data.get("verify_certs", True)
        )

        redis_data = data.get("redis", {})
        redis_cfg = RedisConfig(
            url=redis_data.get("url", "redis://localhost:6379/0"),
            socket_timeout=float(redis_data.get("socket_timeout", 2.0)),
            key_prefix=redis_data.get("key_prefix", "pdfs")
        )

        search_data = data.get("search", {})
        search = SearchConfig(
            page_size=search_data.get("page_size", 10),
            name_boost=float(search_data.get("name_boost", 5.0)),
            tags_boost=float(search_data.get("tags_boost", 2.0)),
            fragment_size=min(search_data.get("fragment_size", 140), 140),
            number_of_fragments=min(search_data.get("number_of_fragments", 3), 3),
            inner_hits_size=search_data.get("inner_hits_size", 3),
            pre_tag=search_data.get("pre_tag", "<mark>"),
            post_tag=search_data.get("post_tag", "</mark>"),
            track_total_hits=search_data.get("track_total_hits", True),
            list_limit=search_data.get("list_limit", 100)
        )

        tags_data = data.get("tags", {})
        tags = TagsConfig(
            limit=tags_data.get("limit", 20),
            min_length=tags_data.get("min_length", 3)
        )

        cache_data = data.get("cache", {})
        cache = CacheConfig(
            search_ttl_seconds=cache_data.get("search_ttl_seconds", 86400),
            list_ttl_seconds=cache_data.get("list_ttl_seconds", 60),
            history_size=cache_data.get("history_size", 500),
            suggestion_limit=cache_data.get("suggestion_limit", 5)
        )

        api_data = data.get("api", {})
        api = APIConfig(
            title=api_data.get("title", "PDF Search Service"),
            cors_origins=api_data.get("cors_origins", ["*"])
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5)
        )

        return cls(
            paths=paths,
            extraction=extraction,
            elasticsearch=elasticsearch,
            redis=redis_cfg,
            search=search,
            tags=tags,
            cache=cache,
            api=api,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    uses PDFSEARCH_CONFIG or searches upward from the
                    current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Locate config.json via the environment or by searching upward."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)
