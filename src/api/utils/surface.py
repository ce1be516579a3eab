"""
Surface classification

Every request belongs to exactly one surface, decided from its path
against a static prefix table.
"""

from dataclasses import dataclass
from enum import Enum


class Surface(str, Enum):
    api = "api"
    admin = "admin"
    web = "web"


@dataclass(frozen=True)
class SurfacePrefixes:
    api: str = "/api"
    admin: str = "/admin"
    web: str = "/"

    @classmethod
    def from_config(cls, config) -> "SurfacePrefixes":
        return cls(api=config.API_PREFIX, admin=config.ADMIN_PREFIX, web=config.WEB_PREFIX)


def _under(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    if not prefix:
        return True
    return path == prefix or path.startswith(prefix + "/")


def classify_surface(path: str, prefixes: SurfacePrefixes) -> Surface:
    """API and admin prefixes are tried first; everything else is web."""
    if _under(path, prefixes.api):
        return Surface.api
    if _under(path, prefixes.admin):
        return Surface.admin
    return Surface.web


def join_path(prefix: str, path: str = "/") -> str:
    """``join_path("/admin", "/sign-in") == "/admin/sign-in"``; root stays "/"."""
    joined = prefix.rstrip("/") + "/" + path.lstrip("/")
    if len(joined) > 1:
        joined = joined.rstrip("/")
    return joined
