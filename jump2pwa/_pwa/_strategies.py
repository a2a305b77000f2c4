"""Fetch handlers for the supported caching strategies.

Each handler is a complete ``fetch`` listener. They reference the
``CACHE_NAME`` and ``OFFLINE_PAGE`` constants declared in the service
worker header, so they are emitted as-is with no interpolation.
"""

# CACHE-FIRST
# Serve from cache when possible. Misses go to the network and are stored.
# Anything that fails (offline with nothing cached) gets the offline page.

CACHE_FIRST_JS = """self.addEventListener('fetch', event => {
  event.respondWith(
    caches.match(event.request).then(cachedResponse => {
      return cachedResponse || fetch(event.request).then(networkResponse => {
        return caches.open(CACHE_NAME).then(cache => {
          cache.put(event.request, networkResponse.clone());
          return networkResponse;
        });
      });
    }).catch(() => caches.match(OFFLINE_PAGE))
  );
});
"""

# NETWORK-FIRST
# Always try the network. Successful responses are stored and returned
# directly; the cache is only read for the offline page.

NETWORK_FIRST_JS = """self.addEventListener('fetch', event => {
  event.respondWith(
    fetch(event.request).then(networkResponse => {
      return caches.open(CACHE_NAME).then(cache => {
        cache.put(event.request, networkResponse.clone());
        return networkResponse;
      });
    }).catch(() => caches.match(OFFLINE_PAGE))
  );
});
"""

# STALE-WHILE-REVALIDATE
# Answer from cache immediately and refresh the entry in the background.
# Without a cached entry the request waits on the network fetch.
# The background fetch has no rejection handler of its own.

STALE_WHILE_REVALIDATE_JS = """self.addEventListener('fetch', event => {
  event.respondWith(
    caches.open(CACHE_NAME).then(cache => {
      return cache.match(event.request).then(cachedResponse => {
        const fetchPromise = fetch(event.request).then(networkResponse => {
          cache.put(event.request, networkResponse.clone());
          return networkResponse;
        });
        return cachedResponse || fetchPromise;
      });
    }).catch(() => caches.match(OFFLINE_PAGE))
  );
});
"""

FETCH_HANDLERS = {
    "cache-first": CACHE_FIRST_JS,
    "network-first": NETWORK_FIRST_JS,
    "stale-while-revalidate": STALE_WHILE_REVALIDATE_JS,
}
