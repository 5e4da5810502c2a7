from __future__ import annotations

from urllib.parse import urlsplit

from medisync.config import Config


def _key(url: str) -> tuple[str, str, str, str]:
    parts = urlsplit(url)
    return (parts.scheme.lower(), (parts.hostname or "").lower(), parts.path or "/", parts.query)


class ImageAllowList:
    """
    Remote image sources the image layer may load.

    A candidate is accepted only if scheme, host, path and query string all
    equal one of the configured URLs. Everything else is rejected.
    """

    def __init__(self, patterns: list[str]) -> None:
        self.patterns = tuple(patterns)
        self._allowed = frozenset(_key(p) for p in self.patterns)

    @classmethod
    def from_config(cls, cfg: Config) -> "ImageAllowList":
        return cls(cfg.image_remote_patterns)

    def is_allowed(self, url: str) -> bool:
        if not url:
            return False
        return _key(url) in self._allowed


def is_allowed_image(url: str, cfg: Config | None = None) -> bool:
    return ImageAllowList.from_config(cfg or Config()).is_allowed(url)
