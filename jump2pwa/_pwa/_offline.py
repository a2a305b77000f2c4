"""Offline fallback page served by the service worker when the network is gone."""

import html
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import OfflinePageConfig

# OFFLINE PAGE
# Self-contained: no external stylesheet or script so it renders from cache alone.

OFFLINE_PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang='en'>
<head>
  <meta charset='UTF-8'>
  <meta name='viewport' content='width=device-width, initial-scale=1.0'>
  <title>{title}</title>
  <style>
    body {{ font-family: Arial, sans-serif; text-align: center; padding: 50px; }}
    h1 {{ color: #FF0000; }}
  </style>
</head>
<body>
  <h1>Offline</h1>
  <p>{message}</p>
</body>
</html>
"""


def render_offline_page(config: "OfflinePageConfig") -> str:
    """Render the offline page HTML.

    With allow_html the message is inserted unescaped and may carry markup.
    """
    message = config.message if config.allow_html else html.escape(config.message)
    return OFFLINE_PAGE_TEMPLATE.format(title=html.escape(config.title), message=message)
