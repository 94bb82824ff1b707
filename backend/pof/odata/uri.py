"""
URI helpers shared by the handlers and the core service client.
"""
from typing import Dict, Optional
from urllib.parse import quote

# Characters OData keeps literal inside system query option values
_QUERY_SAFE = "$'(),/:*"


def build_uri(path: str, options: Dict[str, str]) -> str:
    """
    Build a service-relative URI with percent-encoded query options.

    Spaces become %20 (not '+'), which every OData server accepts in $filter.
    """
    if not options:
        return path
    query = "&".join(
        f"{name}={quote(str(value), safe=_QUERY_SAFE)}"
        for name, value in options.items()
    )
    return f"{path}?{query}"


def get_normalized_uri(path: str, query_string: Optional[str], odata_root: str) -> str:
    """
    Turn an incoming request into a URI relative to the OData service root.

    The raw query string is kept untouched so the rewriter sees the client's
    own encoding.
    """
    root = "/" + odata_root.strip("/")
    # a proxy root_path may sit in front of the OData root
    position = path.find(root)
    if position != -1:
        path = path[position + len(root):]
    if not path.startswith("/"):
        path = "/" + path
    if query_string:
        return f"{path}?{query_string}"
    return path
