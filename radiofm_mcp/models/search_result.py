"""Data models for the RadioFM combo search response.

The upstream API enforces no schema: any field of an item may be missing,
null or empty. Records keep every field optional and expose the display
fallbacks explicitly.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _optional_text(record: Dict[str, Any], key: str) -> Optional[str]:
    """Return the field as text, or None when it is absent, null or empty."""
    value = record.get(key)
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class ResultItem:
    """A station or podcast hit within a result group."""
    
    station_name: Optional[str] = None
    podcast_name: Optional[str] = None
    station_genre: Optional[str] = None
    category_name: Optional[str] = None
    short_url: Optional[str] = None
    deeplink: Optional[str] = None
    
    @classmethod
    def from_dict(cls, record: Any) -> "ResultItem":
        """Build an item from an upstream record; non-mapping records become empty items."""
        if not isinstance(record, dict):
            return cls()
        return cls(
            station_name=_optional_text(record, "st_name"),
            podcast_name=_optional_text(record, "p_name"),
            station_genre=_optional_text(record, "st_genre"),
            category_name=_optional_text(record, "cat_name"),
            short_url=_optional_text(record, "st_shorturl"),
            deeplink=_optional_text(record, "deeplink"),
        )
    
    @property
    def display_name(self) -> str:
        if self.station_name is not None:
            return self.station_name
        if self.podcast_name is not None:
            return self.podcast_name
        return ""
    
    @property
    def display_category(self) -> str:
        if self.station_genre is not None:
            return self.station_genre
        if self.category_name is not None:
            return self.category_name
        return ""
    
    def link(self, player_base_url: str) -> str:
        """
        Resolve the link to play this item.
        
        Args:
            player_base_url: Base URL of the RadioFM web player
            
        Returns:
            The deeplink if present, else the player URL built from the
            short URL, else an empty string
        """
        if self.deeplink is not None:
            return self.deeplink
        if self.short_url is not None:
            return f"{player_base_url.rstrip('/')}/{self.short_url}"
        return ""


@dataclass(frozen=True)
class ResultGroup:
    """A group of hits of one kind (e.g. "station", "podcast")."""
    
    type: str = ""
    items: List[ResultItem] = field(default_factory=list)
    
    @classmethod
    def from_dict(cls, record: Any) -> "ResultGroup":
        if not isinstance(record, dict):
            return cls()
        raw_items = record.get("data")
        items = [ResultItem.from_dict(item) for item in raw_items] if isinstance(raw_items, list) else []
        group_type = record.get("type")
        return cls(
            type=str(group_type) if group_type is not None else "",
            items=items,
        )


@dataclass(frozen=True)
class UpstreamSearchResponse:
    """Parsed `{data: {Data: [...]}}` envelope returned by the combo search endpoint."""
    
    groups: List[ResultGroup] = field(default_factory=list)
    
    @property
    def is_empty(self) -> bool:
        return not self.groups
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a summary dictionary for logging."""
        return {
            "group_count": len(self.groups),
            "item_counts": [len(group.items) for group in self.groups],
        }
