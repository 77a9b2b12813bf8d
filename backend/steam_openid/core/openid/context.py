"""
Request context for the Steam OpenID flow.

An AuthContext is captured once per incoming request and shared by both
steps of the flow: building the login redirect and validating the callback.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple
from urllib.parse import unquote_plus

from fastapi import Request

OPENID_PARAM_PREFIX = "openid."


def _is_openid_param(part: str) -> bool:
    name = part.split("=", 1)[0]
    return unquote_plus(name).startswith(OPENID_PARAM_PREFIX)


def strip_openid_params(request_uri: str) -> str:
    """
    Remove every openid.* query parameter from a request URI.

    Other query parameters are kept verbatim (not re-encoded) so the result
    compares equal to the URL that was sent to the provider as return_to.
    """
    path, sep, query = request_uri.partition("?")
    if not sep:
        return request_uri

    kept = [part for part in query.split("&") if part and not _is_openid_param(part)]
    if not kept:
        return path
    return f"{path}?{'&'.join(kept)}"


def first_values(items: Iterable[Tuple[str, object]]) -> Mapping[str, str]:
    """Collapse multi-valued parameters; the first value of a repeated key wins."""
    values: dict[str, str] = {}
    for key, value in items:
        if isinstance(value, str):
            values.setdefault(key, value)
    return MappingProxyType(values)


@dataclass(frozen=True)
class AuthContext:
    """
    Immutable snapshot of the current request.

    Attributes:
        root: scheme + host of the request, e.g. "https://example.com"
        return_url: root + request URI without openid.* query parameters
        params: query parameters (GET) or form fields (POST)
    """

    root: str
    return_url: str
    params: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, name: str, default: str = "") -> str:
        return self.params.get(name, default)

    @classmethod
    def from_parts(
        cls,
        scheme: str,
        host: str,
        request_uri: str,
        params: Optional[Mapping[str, str]] = None,
    ) -> "AuthContext":
        """Build a context from already-extracted request pieces."""
        root = f"{scheme}://{host}"
        if not request_uri.startswith("/"):
            request_uri = f"/{request_uri}"
        return cls(
            root=root,
            return_url=root + strip_openid_params(request_uri),
            params=first_values((params or {}).items()),
        )

    @classmethod
    async def from_request(cls, request: Request) -> "AuthContext":
        """
        Build a context from a FastAPI/Starlette request.

        The scheme follows the transport (https under TLS, or as rewritten by
        the server's proxy-header handling); the host comes from the Host
        header. GET reads the query string, POST reads the form body.
        """
        scheme = "https" if request.url.scheme in ("https", "wss") else "http"
        host = request.headers.get("host") or request.url.netloc

        raw_path = request.scope.get("raw_path")
        path = raw_path.decode("latin-1") if raw_path else request.url.path
        query = request.scope.get("query_string", b"").decode("latin-1")
        request_uri = f"{path}?{query}" if query else path

        method = request.method.upper()
        if method == "POST":
            form = await request.form()
            items = list(form.multi_items())
        elif method in ("GET", "HEAD"):
            items = list(request.query_params.multi_items())
        else:
            items = []

        root = f"{scheme}://{host}"
        return cls(
            root=root,
            return_url=root + strip_openid_params(request_uri),
            params=first_values(items),
        )
