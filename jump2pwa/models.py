"""Value objects shared by the renderers and writers."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Icon:
    """A single manifest icon entry.

    Attributes:
        src: Icon path or URL, relative to the manifest.
        sizes: Space separated sizes (e.g., "192x192").
        type: MIME type of the image (e.g., "image/png").
    """

    src: str
    sizes: str
    type: str

    def to_dict(self) -> dict[str, str]:
        """Return the icon as a dict in manifest key order."""
        return {"src": self.src, "sizes": self.sizes, "type": self.type}


@dataclass(frozen=True)
class GeneratedFile:
    """A file written by one of the generators.

    Attributes:
        path: Absolute path of the written file.
        content: Exact text that was written.
    """

    path: Path
    content: str

    @property
    def filename(self) -> str:
        return self.path.name
