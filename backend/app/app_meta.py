"""Name, description and version of the service.

The version lives in the repository VERSION file so packaging and the API report the same value.
"""

from pathlib import Path


def _load_version() -> str:
	version_file = Path(__file__).resolve().parents[2] / "VERSION"
	try:
		return version_file.read_text(encoding="utf-8").strip()
	except FileNotFoundError:  # pragma: no cover - only when repository is missing VERSION
		return "0.0.0"


__app_name__ = "Video Thumbnail Resolver"
__description__ = (
	"Resolve a displayable thumbnail (URL and dimensions) for YouTube, Vimeo and PeerTube"
	" video pages, with a 24 hour in-memory cache."
)
__version__ = _load_version()
