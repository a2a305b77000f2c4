"""Progressive Web App asset renderers.

Pure functions that turn configuration objects into file contents.
Nothing in this package touches the filesystem.

Rendered files:
- manifest.json: installable app descriptor
- offline.html: fallback page shown when the network is unavailable
- service-worker.js: precache, cache eviction and fetch strategy
"""

from ._manifest import MANIFEST_FILENAME, manifest_dict, render_manifest
from ._offline import render_offline_page
from ._service_worker import SERVICE_WORKER_FILENAME, js_string, render_service_worker

__all__ = [
    "MANIFEST_FILENAME",
    "SERVICE_WORKER_FILENAME",
    "js_string",
    "manifest_dict",
    "render_manifest",
    "render_offline_page",
    "render_service_worker",
]
