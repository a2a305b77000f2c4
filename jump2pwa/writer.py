"""Write PWA files into an output directory.

Each writer creates the directory if needed, renders its file and
overwrites any existing copy. Filesystem errors propagate as OSError.
"""

import logging
from dataclasses import replace
from pathlib import Path

from ._pwa import (
    MANIFEST_FILENAME,
    SERVICE_WORKER_FILENAME,
    render_manifest,
    render_offline_page,
    render_service_worker,
)
from .config import ManifestConfig, OfflinePageConfig, PwaConfig, ServiceWorkerConfig
from .models import GeneratedFile

logger = logging.getLogger(__name__)


def _write_file(output_dir: str | Path, filename: str, content: str) -> GeneratedFile:
    """Create output_dir if missing and write content to filename, truncating."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    path = (directory / filename).resolve()
    path.write_text(content, encoding="utf-8")
    logger.debug("Wrote %d characters to %s", len(content), path)
    return GeneratedFile(path=path, content=content)


def generate_manifest(output_dir: str | Path, config: ManifestConfig | None = None) -> GeneratedFile:
    """Generate manifest.json in output_dir.

    Args:
        output_dir: Directory to write into (created if missing).
        config: Application descriptor. Defaults to ManifestConfig().

    Returns:
        The written file.
    """
    if config is None:
        config = ManifestConfig()

    generated = _write_file(output_dir, MANIFEST_FILENAME, render_manifest(config))
    logger.info("%s has been generated at: %s", MANIFEST_FILENAME, generated.path)
    return generated


def create_offline_page(output_dir: str | Path, config: OfflinePageConfig | None = None) -> GeneratedFile:
    """Generate the offline fallback page in output_dir.

    Args:
        output_dir: Directory to write into (created if missing).
        config: Message and filename. Defaults to OfflinePageConfig().

    Returns:
        The written file.
    """
    if config is None:
        config = OfflinePageConfig()

    generated = _write_file(output_dir, config.filename, render_offline_page(config))
    logger.info("Offline page has been generated at: %s", generated.path)
    return generated


def generate_service_worker(output_dir: str | Path, config: ServiceWorkerConfig | None = None) -> GeneratedFile:
    """Generate service-worker.js in output_dir.

    The caching strategy is validated when the ServiceWorkerConfig is built,
    so an invalid strategy never reaches this point and nothing is written.

    Args:
        output_dir: Directory to write into (created if missing).
        config: Cache name, assets, offline page and strategy. Defaults to
            ServiceWorkerConfig().

    Returns:
        The written file.
    """
    if config is None:
        config = ServiceWorkerConfig()

    generated = _write_file(output_dir, SERVICE_WORKER_FILENAME, render_service_worker(config))
    logger.info(
        "%s with caching strategy '%s' has been generated at: %s",
        SERVICE_WORKER_FILENAME,
        config.caching_strategy.value,
        generated.path,
    )
    return generated


def service_worker_config_for(config: PwaConfig) -> ServiceWorkerConfig:
    """Return the service worker config with OFFLINE_PAGE bound to the offline page filename."""
    sw = config.service_worker
    if sw.offline_page == config.offline.filename:
        return sw
    return replace(sw, offline_page=config.offline.filename)


def render_all(config: PwaConfig) -> dict[str, str]:
    """Render every file of a setup without writing anything.

    Returns:
        Mapping of filename to content, in generation order.
    """
    return {
        MANIFEST_FILENAME: render_manifest(config.manifest),
        config.offline.filename: render_offline_page(config.offline),
        SERVICE_WORKER_FILENAME: render_service_worker(service_worker_config_for(config)),
    }


def setup_pwa(config: PwaConfig | None = None) -> list[GeneratedFile]:
    """Generate manifest.json, the offline page and service-worker.js.

    Files are written in that order into config.output_dir. There is no
    rollback: if a later step fails, files already written stay on disk.

    Returns:
        The written files in generation order.
    """
    if config is None:
        config = PwaConfig()

    return [
        generate_manifest(config.output_dir, config.manifest),
        create_offline_page(config.output_dir, config.offline),
        generate_service_worker(config.output_dir, service_worker_config_for(config)),
    ]
