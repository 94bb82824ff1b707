"""
OData result wrappers
"""
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ODataResultList(BaseModel, Generic[T]):
    """
    One page of an entity set read.

    count is only present when the request asked for $inlinecount,
    next_link only when the backend paged the result.
    """
    results: List[T] = Field(default_factory=list)
    count: Optional[int] = None
    next_link: Optional[str] = None

    def to_odata(self) -> Dict[str, Any]:
        """Render as an OData v2 JSON entity-set envelope."""
        body: Dict[str, Any] = {"results": list(self.results)}
        if self.count is not None:
            body["__count"] = str(self.count)
        if self.next_link:
            body["__next"] = self.next_link
        return {"d": body}
