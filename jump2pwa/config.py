"""Configuration loader with type-safe dataclasses."""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import yaml

from ._pwa._strategies import FETCH_HANDLERS
from .models import Icon


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


class InvalidCachingStrategyError(ConfigError):
    """Raised when a caching strategy name is not recognized."""

    pass


class CachingStrategy(Enum):
    """Request handling policy emitted into the service worker's fetch handler."""

    CACHE_FIRST = "cache-first"
    NETWORK_FIRST = "network-first"
    STALE_WHILE_REVALIDATE = "stale-while-revalidate"

    @property
    def fetch_handler(self) -> str:
        """JavaScript ``fetch`` listener implementing this strategy."""
        return FETCH_HANDLERS[self.value]

    @classmethod
    def parse(cls, value: "str | CachingStrategy") -> "CachingStrategy":
        """Convert a strategy name to a member.

        Raises:
            InvalidCachingStrategyError: If the name is not one of the known strategies.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidCachingStrategyError(
                f"Invalid caching strategy specified: {value!r}. Must be one of: {strategy_names()}"
            ) from None


def strategy_names() -> tuple[str, ...]:
    """Return the valid caching strategy names in declaration order."""
    return tuple(strategy.value for strategy in CachingStrategy)


# Filename of the generated offline fallback page.
# The service worker precaches and serves this same name.
OFFLINE_PAGE_FILENAME = "offline.html"

DEFAULT_OUTPUT_DIR = "www"
DEFAULT_CACHE_NAME = "my-pwa-cache-v1"


def _default_icons() -> list[Icon]:
    return [
        Icon(src="icons/icon-192x192.png", sizes="192x192", type="image/png"),
        Icon(src="icons/icon-512x512.png", sizes="512x512", type="image/png"),
    ]


def _default_assets() -> list[str]:
    return ["/", "/index.html", "/css/style.css", "/js/app.js"]


def _default_setup_assets() -> list[str]:
    return ["/", "/index.html", "/css/style.css"]


@dataclass(frozen=True)
class ManifestConfig:
    """Application descriptor rendered to manifest.json.

    Values are written verbatim. Unknown display modes, malformed colors
    and an empty icon list are all accepted.
    """

    name: str = "My PWA"
    short_name: str = "PWA"
    start_url: str = "/"
    display: str = "standalone"  # standalone, fullscreen, minimal-ui or browser
    orientation: str = "any"  # any, portrait or landscape
    background_color: str = "#ffffff"
    theme_color: str = "#ffffff"
    icons: list[Icon] = field(default_factory=_default_icons)


@dataclass(frozen=True)
class OfflinePageConfig:
    """Configuration for the offline fallback page.

    The message is HTML-escaped unless allow_html is set, in which case it is
    inserted into the page as raw markup.
    """

    message: str = "You are currently offline."
    filename: str = OFFLINE_PAGE_FILENAME
    title: str = "Offline"
    allow_html: bool = False

    def __post_init__(self) -> None:
        if not self.filename:
            raise ConfigError("Offline page filename cannot be empty")
        if "/" in self.filename or "\\" in self.filename:
            raise ConfigError(f"Offline page filename must not contain a path separator, got '{self.filename}'")


@dataclass(frozen=True)
class ServiceWorkerConfig:
    """Configuration for service-worker.js.

    Asset order is preserved and becomes the precache list, followed by
    offline_page. Duplicates are kept.
    """

    cache_name: str = DEFAULT_CACHE_NAME
    assets: list[str] = field(default_factory=_default_assets)
    offline_page: str = OFFLINE_PAGE_FILENAME
    caching_strategy: CachingStrategy = CachingStrategy.CACHE_FIRST

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize strategy names through object.__setattr__
        object.__setattr__(self, "caching_strategy", CachingStrategy.parse(self.caching_strategy))
        if not isinstance(self.assets, list):
            raise ConfigError("Service worker assets must be a list")


@dataclass(frozen=True)
class PwaConfig:
    """Main configuration container for a full PWA setup."""

    output_dir: str = DEFAULT_OUTPUT_DIR
    manifest: ManifestConfig = field(default_factory=ManifestConfig)
    offline: OfflinePageConfig = field(default_factory=OfflinePageConfig)
    service_worker: ServiceWorkerConfig = field(
        default_factory=lambda: ServiceWorkerConfig(assets=_default_setup_assets())
    )

    def __post_init__(self) -> None:
        if not self.output_dir:
            raise ConfigError("Output directory cannot be empty")


def _require_mapping(data: object, section: str) -> dict:
    if not isinstance(data, dict):
        raise ConfigError(f"'{section}' section must be a dictionary")
    return data


def _str_value(data: dict, key: str, default: str) -> str:
    """Return data[key] as a string, or default when the key is missing or empty."""
    value = data.get(key)
    return default if value is None else str(value)


def _bool_value(data: dict, key: str, default: bool, section: str) -> bool:
    """Return data[key] as a bool.

    Strings are accepted as true only for "true", "1" or "yes".
    """
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    raise ConfigError(f"'{section}.{key}' must be a boolean, got {value!r}")


def _parse_icon(data: dict, index: int) -> Icon:
    """Parse a single icon entry."""
    if not isinstance(data, dict):
        raise ConfigError(f"Icon entry {index} must be a dictionary")

    for key in ("src", "sizes", "type"):
        if data.get(key) is None:
            raise ConfigError(f"Icon entry {index} is missing '{key}' field")

    return Icon(src=str(data["src"]), sizes=str(data["sizes"]), type=str(data["type"]))


def _parse_manifest_config(data: dict | None) -> ManifestConfig:
    """Parse manifest configuration section."""
    if data is None:
        return ManifestConfig()
    data = _require_mapping(data, "manifest")

    defaults = ManifestConfig()
    icons = defaults.icons
    icons_data = data.get("icons")
    if icons_data is not None:
        if not isinstance(icons_data, list):
            raise ConfigError("'manifest.icons' must be a list")
        icons = [_parse_icon(icon_data, i) for i, icon_data in enumerate(icons_data)]

    return ManifestConfig(
        name=_str_value(data, "name", defaults.name),
        short_name=_str_value(data, "short_name", defaults.short_name),
        start_url=_str_value(data, "start_url", defaults.start_url),
        display=_str_value(data, "display", defaults.display),
        orientation=_str_value(data, "orientation", defaults.orientation),
        background_color=_str_value(data, "background_color", defaults.background_color),
        theme_color=_str_value(data, "theme_color", defaults.theme_color),
        icons=icons,
    )


def _parse_offline_config(data: dict | None) -> OfflinePageConfig:
    """Parse offline page configuration section."""
    if data is None:
        return OfflinePageConfig()
    data = _require_mapping(data, "offline")

    return OfflinePageConfig(
        message=_str_value(data, "message", OfflinePageConfig.message),
        filename=_str_value(data, "filename", OFFLINE_PAGE_FILENAME),
        title=_str_value(data, "title", OfflinePageConfig.title),
        allow_html=_bool_value(data, "allow_html", False, "offline"),
    )


def _parse_service_worker_config(data: dict | None, offline_page: str) -> ServiceWorkerConfig:
    """Parse service worker configuration section.

    The offline page path always comes from the offline section so both
    files agree on the fallback filename.
    """
    if data is None:
        return ServiceWorkerConfig(assets=_default_setup_assets(), offline_page=offline_page)
    data = _require_mapping(data, "service_worker")

    assets_data = data.get("assets")
    if assets_data is None:
        assets = _default_setup_assets()
    elif isinstance(assets_data, list):
        assets = [str(asset) for asset in assets_data]
    else:
        raise ConfigError("'service_worker.assets' must be a list")

    return ServiceWorkerConfig(
        cache_name=_str_value(data, "cache_name", DEFAULT_CACHE_NAME),
        assets=assets,
        offline_page=offline_page,
        caching_strategy=_str_value(data, "caching_strategy", CachingStrategy.CACHE_FIRST.value),
    )


def _apply_env_overrides(config_data: dict) -> dict:
    """Apply environment variable overrides to configuration.

    Supported overrides:
    - JUMP2PWA_OUTPUT_DIR: Override output_dir
    - JUMP2PWA_CACHE_NAME: Override service_worker.cache_name
    - JUMP2PWA_CACHING_STRATEGY: Override service_worker.caching_strategy
    - JUMP2PWA_OFFLINE_MESSAGE: Override offline.message
    """
    for section in ("offline", "service_worker"):
        section_data = config_data.get(section)
        config_data[section] = {} if section_data is None else dict(_require_mapping(section_data, section))

    output_dir = os.environ.get("JUMP2PWA_OUTPUT_DIR")
    if output_dir is not None:
        config_data["output_dir"] = output_dir

    cache_name = os.environ.get("JUMP2PWA_CACHE_NAME")
    if cache_name is not None:
        config_data["service_worker"]["cache_name"] = cache_name

    caching_strategy = os.environ.get("JUMP2PWA_CACHING_STRATEGY")
    if caching_strategy is not None:
        config_data["service_worker"]["caching_strategy"] = caching_strategy

    offline_message = os.environ.get("JUMP2PWA_OFFLINE_MESSAGE")
    if offline_message is not None:
        config_data["offline"]["message"] = offline_message

    return config_data


def parse_config(data: dict) -> PwaConfig:
    """Build a validated PwaConfig from an already-loaded mapping.

    Environment overrides are applied on top of ``data``.

    Raises:
        ConfigError: If any section is malformed.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a YAML dictionary")

    data = _apply_env_overrides(dict(data))

    offline = _parse_offline_config(data.get("offline"))

    return PwaConfig(
        output_dir=_str_value(data, "output_dir", DEFAULT_OUTPUT_DIR),
        manifest=_parse_manifest_config(data.get("manifest")),
        offline=offline,
        service_worker=_parse_service_worker_config(data.get("service_worker"), offline.filename),
    )


def load_config(config_path: str) -> PwaConfig:
    """Load and validate configuration from a YAML file.

    An empty file yields the default configuration.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Validated PwaConfig object.

    Raises:
        ConfigError: If the file cannot be read or configuration is invalid.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML configuration: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file: {e}")

    if data is None:
        data = {}

    return parse_config(data)
