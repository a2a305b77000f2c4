"""Service Worker JavaScript for PWA caching.

The script is built from four parts:
- Header: CACHE_NAME, OFFLINE_PAGE and ASSETS constants
- Install: precache ASSETS followed by OFFLINE_PAGE
- Activate: delete every cache except CACHE_NAME
- Fetch: one handler chosen by the caching strategy
"""

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import ServiceWorkerConfig

SERVICE_WORKER_FILENAME = "service-worker.js"

HEADER_TEMPLATE = """\
const CACHE_NAME = {cache_name};
const OFFLINE_PAGE = {offline_page};
const ASSETS = {assets};

"""

# Install event - precache assets plus the offline page (no dedupe)
INSTALL_JS = """\
self.addEventListener('install', event => {
  event.waitUntil(
    caches.open(CACHE_NAME).then(cache => {
      return cache.addAll(ASSETS.concat(OFFLINE_PAGE));
    })
  );
});

"""

# Activate event - keep exactly one cache generation alive
ACTIVATE_JS = """\
self.addEventListener('activate', event => {
  event.waitUntil(
    caches.keys().then(cacheNames => {
      return Promise.all(
        cacheNames.filter(cache => cache !== CACHE_NAME).map(cache => caches.delete(cache))
      );
    })
  );
});

"""

_JS_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def js_string(value: str) -> str:
    """Quote a value as a single-quoted JavaScript string literal."""
    return "'" + "".join(_JS_STRING_ESCAPES.get(char, char) for char in value) + "'"


def render_header(config: "ServiceWorkerConfig") -> str:
    return HEADER_TEMPLATE.format(
        cache_name=js_string(config.cache_name),
        offline_page=js_string(config.offline_page),
        assets=json.dumps(list(config.assets), separators=(",", ":"), ensure_ascii=False),
    )


def render_service_worker(config: "ServiceWorkerConfig") -> str:
    """Render the complete service-worker.js script."""
    return render_header(config) + INSTALL_JS + ACTIVATE_JS + config.caching_strategy.fetch_handler
