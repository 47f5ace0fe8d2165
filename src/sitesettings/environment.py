"""Read-only request environment exposed alongside the core settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


def _build_uris(public_root: str) -> Mapping[str, str]:
    return MappingProxyType(
        {
            "public": public_root,
            "js": f"{public_root}/js/",
            "css": f"{public_root}/css/",
            "favicon": f"{public_root}/css/favicon.ico",
            "image": f"{public_root}/images/",
        }
    )


@dataclass(frozen=True)
class SiteEnvironment:
    """URIs derived once from the scheme, host and script path of the serving request."""

    scheme: str
    host: str
    script_path: str = ""
    uri: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        script_path = self.script_path.rstrip("/")
        object.__setattr__(self, "script_path", script_path)
        object.__setattr__(self, "uri", _build_uris(f"{self.scheme}://{self.host}{script_path}"))

    @classmethod
    def from_wsgi_environ(cls, environ: Mapping[str, Any]) -> "SiteEnvironment":
        """Build from a WSGI environ (``wsgi.url_scheme``, ``SERVER_NAME``, ``SCRIPT_NAME``)."""
        return cls(
            scheme=environ.get("wsgi.url_scheme", "http"),
            host=environ.get("SERVER_NAME", "localhost"),
            script_path=environ.get("SCRIPT_NAME", ""),
        )

    @classmethod
    def from_request(cls, request) -> "SiteEnvironment":
        """Build from a Flask/Werkzeug request, honouring the Host header and script root."""
        return cls(scheme=request.scheme, host=request.host, script_path=request.script_root)

    def lookup(self, name: str) -> Any:
        """Return a top-level environment value; raise KeyError if there is none."""
        if name == "uri":
            return self.uri
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return name == "uri"


__all__ = ["SiteEnvironment"]
