"""Tests for the configuration module."""

from pathlib import Path

import pytest

from jump2pwa.config import (
    CachingStrategy,
    ConfigError,
    InvalidCachingStrategyError,
    ManifestConfig,
    OfflinePageConfig,
    PwaConfig,
    ServiceWorkerConfig,
    load_config,
    parse_config,
    strategy_names,
)
from jump2pwa.models import Icon


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment overrides that would leak into config parsing."""
    for name in (
        "JUMP2PWA_OUTPUT_DIR",
        "JUMP2PWA_CACHE_NAME",
        "JUMP2PWA_CACHING_STRATEGY",
        "JUMP2PWA_OFFLINE_MESSAGE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def valid_config_content() -> str:
    """Return a valid configuration YAML content."""
    return """output_dir: public

manifest:
  name: My Shiny PWA
  short_name: ShinyPWA
  orientation: portrait
  theme_color: "#000000"
  icons:
    - src: www/icon.png
      sizes: 192x192
      type: image/png

offline:
  message: No connection

service_worker:
  cache_name: shiny-pwa-cache-v1
  caching_strategy: network-first
  assets:
    - /
    - /index.html
"""


class TestCachingStrategy:
    """Tests for CachingStrategy enum."""

    def test_parses_every_known_name(self) -> None:
        """Each strategy name maps to its member."""
        assert CachingStrategy.parse("cache-first") is CachingStrategy.CACHE_FIRST
        assert CachingStrategy.parse("network-first") is CachingStrategy.NETWORK_FIRST
        assert CachingStrategy.parse("stale-while-revalidate") is CachingStrategy.STALE_WHILE_REVALIDATE

    def test_parse_accepts_member(self) -> None:
        """Passing a member returns it unchanged."""
        assert CachingStrategy.parse(CachingStrategy.NETWORK_FIRST) is CachingStrategy.NETWORK_FIRST

    def test_rejects_unknown_name(self) -> None:
        """Unknown strategy names raise InvalidCachingStrategyError."""
        with pytest.raises(InvalidCachingStrategyError, match="Invalid caching strategy specified"):
            CachingStrategy.parse("bogus")

    def test_rejects_wrong_case(self) -> None:
        """Matching is exact."""
        with pytest.raises(InvalidCachingStrategyError):
            CachingStrategy.parse("Cache-First")

    def test_invalid_strategy_is_config_error(self) -> None:
        """InvalidCachingStrategyError can be handled as a ConfigError."""
        with pytest.raises(ConfigError):
            CachingStrategy.parse("")

    def test_every_member_has_fetch_handler(self) -> None:
        """Each strategy carries a fetch listener."""
        for strategy in CachingStrategy:
            assert strategy.fetch_handler.startswith("self.addEventListener('fetch'")

    def test_strategy_names_order(self) -> None:
        """Names are listed in declaration order."""
        assert strategy_names() == ("cache-first", "network-first", "stale-while-revalidate")


class TestManifestConfig:
    """Tests for ManifestConfig dataclass."""

    def test_default_values(self) -> None:
        """Default ManifestConfig has expected values."""
        config = ManifestConfig()
        assert config.name == "My PWA"
        assert config.short_name == "PWA"
        assert config.start_url == "/"
        assert config.display == "standalone"
        assert config.orientation == "any"
        assert config.background_color == "#ffffff"
        assert config.theme_color == "#ffffff"
        assert config.icons == [
            Icon(src="icons/icon-192x192.png", sizes="192x192", type="image/png"),
            Icon(src="icons/icon-512x512.png", sizes="512x512", type="image/png"),
        ]

    def test_default_icons_not_shared(self) -> None:
        """Each instance gets its own default icon list."""
        assert ManifestConfig().icons is not ManifestConfig().icons

    def test_accepts_unvalidated_values(self) -> None:
        """Unknown display modes, odd colors and empty icons are accepted."""
        config = ManifestConfig(display="hologram", background_color="not-a-color", icons=[])
        assert config.display == "hologram"
        assert config.icons == []


class TestOfflinePageConfig:
    """Tests for OfflinePageConfig dataclass."""

    def test_default_values(self) -> None:
        """Default OfflinePageConfig has expected values."""
        config = OfflinePageConfig()
        assert config.message == "You are currently offline."
        assert config.filename == "offline.html"
        assert config.title == "Offline"
        assert config.allow_html is False

    def test_rejects_empty_filename(self) -> None:
        """Empty filename is rejected."""
        with pytest.raises(ConfigError, match="filename cannot be empty"):
            OfflinePageConfig(filename="")

    def test_rejects_filename_with_separator(self) -> None:
        """Filename must stay inside the output directory."""
        with pytest.raises(ConfigError, match="path separator"):
            OfflinePageConfig(filename="pages/offline.html")


class TestServiceWorkerConfig:
    """Tests for ServiceWorkerConfig dataclass."""

    def test_default_values(self) -> None:
        """Default ServiceWorkerConfig has expected values."""
        config = ServiceWorkerConfig()
        assert config.cache_name == "my-pwa-cache-v1"
        assert config.assets == ["/", "/index.html", "/css/style.css", "/js/app.js"]
        assert config.offline_page == "offline.html"
        assert config.caching_strategy is CachingStrategy.CACHE_FIRST

    def test_strategy_string_is_normalized(self) -> None:
        """A strategy name is converted to its enum member."""
        config = ServiceWorkerConfig(caching_strategy="stale-while-revalidate")
        assert config.caching_strategy is CachingStrategy.STALE_WHILE_REVALIDATE

    def test_rejects_invalid_strategy(self) -> None:
        """Invalid strategy fails at construction."""
        with pytest.raises(InvalidCachingStrategyError, match="bogus"):
            ServiceWorkerConfig(caching_strategy="bogus")

    def test_rejects_non_list_assets(self) -> None:
        """Assets must be a list."""
        with pytest.raises(ConfigError, match="assets must be a list"):
            ServiceWorkerConfig(assets="/index.html")

    def test_accepts_empty_assets(self) -> None:
        """An empty asset list is accepted."""
        assert ServiceWorkerConfig(assets=[]).assets == []


class TestPwaConfig:
    """Tests for PwaConfig dataclass."""

    def test_default_values(self) -> None:
        """Default PwaConfig uses the setup asset list."""
        config = PwaConfig()
        assert config.output_dir == "www"
        assert config.service_worker.assets == ["/", "/index.html", "/css/style.css"]
        assert config.offline.filename == "offline.html"

    def test_rejects_empty_output_dir(self) -> None:
        """Empty output directory is rejected."""
        with pytest.raises(ConfigError, match="Output directory cannot be empty"):
            PwaConfig(output_dir="")


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_valid_config(self, tmp_path: Path, valid_config_content: str) -> None:
        """Valid configuration file is loaded correctly."""
        config_file = tmp_path / "pwa.yaml"
        config_file.write_text(valid_config_content)

        config = load_config(str(config_file))

        assert config.output_dir == "public"
        assert config.manifest.name == "My Shiny PWA"
        assert config.manifest.short_name == "ShinyPWA"
        assert config.manifest.orientation == "portrait"
        assert config.manifest.theme_color == "#000000"
        assert config.manifest.display == "standalone"
        assert config.manifest.icons == [Icon(src="www/icon.png", sizes="192x192", type="image/png")]
        assert config.offline.message == "No connection"
        assert config.service_worker.cache_name == "shiny-pwa-cache-v1"
        assert config.service_worker.caching_strategy is CachingStrategy.NETWORK_FIRST
        assert config.service_worker.assets == ["/", "/index.html"]

    def test_missing_file_raises_error(self, tmp_path: Path) -> None:
        """Missing configuration file raises ConfigError."""
        with pytest.raises(ConfigError, match="Configuration file not found"):
            load_config(str(tmp_path / "nonexistent.yaml"))

    def test_invalid_yaml_raises_error(self, tmp_path: Path) -> None:
        """Invalid YAML raises ConfigError."""
        config_file = tmp_path / "pwa.yaml"
        config_file.write_text("manifest: [unclosed")

        with pytest.raises(ConfigError, match="Failed to parse YAML"):
            load_config(str(config_file))

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        """Empty configuration file yields the default configuration."""
        config_file = tmp_path / "pwa.yaml"
        config_file.write_text("")

        assert load_config(str(config_file)) == PwaConfig()

    def test_non_dict_raises_error(self, tmp_path: Path) -> None:
        """Top level must be a mapping."""
        config_file = tmp_path / "pwa.yaml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="must be a YAML dictionary"):
            load_config(str(config_file))

    def test_empty_values_use_defaults(self, tmp_path: Path) -> None:
        """Keys present with no value fall back to their defaults."""
        config_file = tmp_path / "pwa.yaml"
        config_file.write_text(
            "output_dir:\nmanifest:\n  name:\noffline:\n  filename:\nservice_worker:\n  cache_name:\n"
        )

        config = load_config(str(config_file))

        assert config.output_dir == "www"
        assert config.manifest.name == "My PWA"
        assert config.offline.filename == "offline.html"
        assert config.service_worker.offline_page == "offline.html"
        assert config.service_worker.cache_name == "my-pwa-cache-v1"

    def test_invalid_strategy_raises_error(self, tmp_path: Path) -> None:
        """Unknown strategy in the file raises InvalidCachingStrategyError."""
        config_file = tmp_path / "pwa.yaml"
        config_file.write_text("service_worker:\n  caching_strategy: bogus\n")

        with pytest.raises(InvalidCachingStrategyError):
            load_config(str(config_file))


class TestParseConfig:
    """Tests for parse_config section handling."""

    def test_offline_filename_flows_to_service_worker(self) -> None:
        """The service worker falls back to the page the offline section names."""
        config = parse_config({"offline": {"filename": "no-network.html"}})
        assert config.offline.filename == "no-network.html"
        assert config.service_worker.offline_page == "no-network.html"

    def test_section_must_be_mapping(self) -> None:
        """Non-mapping sections are rejected."""
        with pytest.raises(ConfigError, match="'manifest' section must be a dictionary"):
            parse_config({"manifest": "nope"})

    def test_icons_must_be_list(self) -> None:
        """Icons must be a list."""
        with pytest.raises(ConfigError, match="'manifest.icons' must be a list"):
            parse_config({"manifest": {"icons": "icon.png"}})

    def test_icon_missing_field(self) -> None:
        """Icon entries need src, sizes and type."""
        with pytest.raises(ConfigError, match="Icon entry 0 is missing 'type' field"):
            parse_config({"manifest": {"icons": [{"src": "a.png", "sizes": "48x48"}]}})

    def test_empty_icon_list_is_kept(self) -> None:
        """An explicit empty icon list is not replaced by defaults."""
        config = parse_config({"manifest": {"icons": []}})
        assert config.manifest.icons == []

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, True), (False, False), ("false", False), ("no", False), ("0", False), ("true", True), ("YES", True)],
    )
    def test_allow_html_parsing(self, value: object, expected: bool) -> None:
        """allow_html accepts booleans and only true-like strings."""
        config = parse_config({"offline": {"allow_html": value}})
        assert config.offline.allow_html is expected

    def test_quoted_false_keeps_escaping(self, tmp_path: Path) -> None:
        """A quoted "false" in YAML does not switch escaping off."""
        config_file = tmp_path / "pwa.yaml"
        config_file.write_text('offline:\n  allow_html: "false"\n')

        assert load_config(str(config_file)).offline.allow_html is False

    def test_allow_html_rejects_other_types(self) -> None:
        """Non-boolean, non-string values are rejected."""
        with pytest.raises(ConfigError, match="'offline.allow_html' must be a boolean"):
            parse_config({"offline": {"allow_html": [1]}})

    def test_assets_must_be_list(self) -> None:
        """Assets must be a list."""
        with pytest.raises(ConfigError, match="'service_worker.assets' must be a list"):
            parse_config({"service_worker": {"assets": "/"}})

    def test_does_not_mutate_input(self) -> None:
        """Parsing leaves the caller's mapping untouched."""
        data = {"service_worker": {"cache_name": "a"}}
        parse_config(data)
        assert data == {"service_worker": {"cache_name": "a"}}


class TestEnvOverrides:
    """Tests for environment variable overrides."""

    def test_output_dir_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """JUMP2PWA_OUTPUT_DIR overrides output_dir."""
        monkeypatch.setenv("JUMP2PWA_OUTPUT_DIR", "dist")
        assert parse_config({"output_dir": "www"}).output_dir == "dist"

    def test_cache_name_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """JUMP2PWA_CACHE_NAME overrides service_worker.cache_name."""
        monkeypatch.setenv("JUMP2PWA_CACHE_NAME", "release-42")
        assert parse_config({}).service_worker.cache_name == "release-42"

    def test_strategy_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """JUMP2PWA_CACHING_STRATEGY overrides service_worker.caching_strategy."""
        monkeypatch.setenv("JUMP2PWA_CACHING_STRATEGY", "stale-while-revalidate")
        config = parse_config({"service_worker": {"caching_strategy": "cache-first"}})
        assert config.service_worker.caching_strategy is CachingStrategy.STALE_WHILE_REVALIDATE

    def test_invalid_strategy_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An invalid strategy from the environment is rejected."""
        monkeypatch.setenv("JUMP2PWA_CACHING_STRATEGY", "bogus")
        with pytest.raises(InvalidCachingStrategyError):
            parse_config({})

    def test_offline_message_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """JUMP2PWA_OFFLINE_MESSAGE overrides offline.message."""
        monkeypatch.setenv("JUMP2PWA_OFFLINE_MESSAGE", "Back soon")
        assert parse_config({}).offline.message == "Back soon"
