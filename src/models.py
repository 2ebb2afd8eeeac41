"""
Domain Models
Project records and per-visitor filter state.
"""

from dataclasses import dataclass, field
from typing import List, Set, Tuple, Dict, Any


@dataclass(frozen=True)
class Project:
    """
    Immutable catalog entry.

    Attributes:
        id: Unique, stable numeric identifier
        name: Display name
        description: Short description shown on the card
        link: External URL the card points to
        image_url: Opaque image reference (not validated, may be empty)
        tags: Category tags, in display order
    """
    id: int
    name: str
    description: str
    link: str
    image_url: str = ''
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Project':
        """
        Create Project from a catalog entry (accepts 'imageUrl' or 'image_url').

        Null text fields become empty strings and tags are coerced to strings.
        """
        tags = data.get('tags') or ()
        if isinstance(tags, str):
            tags = (tags,)
        return cls(
            id=int(data['id']),
            name=str(data['name'] or ''),
            description=str(data.get('description') or ''),
            link=str(data.get('link') or ''),
            image_url=str(data.get('imageUrl', data.get('image_url')) or ''),
            tags=tuple(str(tag) for tag in tags if tag is not None)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'link': self.link,
            'imageUrl': self.image_url,
            'tags': list(self.tags)
        }


@dataclass
class FilterState:
    """
    Mutable filter state owned by a single page session.

    An empty search term and an empty tag selection both mean "show everything".
    """
    search_term: str = ''
    selected_tags: Set[str] = field(default_factory=set)

    @property
    def has_tag_selection(self) -> bool:
        """True when at least one tag chip is selected"""
        return len(self.selected_tags) > 0

    @property
    def is_active(self) -> bool:
        """True when either the search term or the tag selection narrows the catalog"""
        return self.search_term != '' or self.has_tag_selection

    def copy(self) -> 'FilterState':
        return FilterState(self.search_term, set(self.selected_tags))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON requests and responses"""
        return {
            'search_term': self.search_term,
            'selected_tags': sorted(self.selected_tags),
            'has_tag_selection': self.has_tag_selection,
            'is_active': self.is_active
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FilterState':
        """Build state from a request payload; missing keys fall back to defaults"""
        if not data:
            return cls()
        tags: List[str] = data.get('selected_tags') or []
        return cls(
            search_term=data.get('search_term', ''),
            selected_tags=set(tags)
        )
