"""
Catalog Filter Module
Narrows the project catalog by free-text search and selected tag chips.
"""

from typing import List, Dict, Any, Iterable, Optional, Tuple, FrozenSet

from catalog_data import load_catalog
from logger import get_logger
from models import Project, FilterState

logger = get_logger('catalog_filter')


def get_all_unique_tags(projects: Iterable[Project]) -> List[str]:
    """
    Collect every tag used in the catalog, deduplicated and sorted.

    Deduplication is case-sensitive, so 'Naming' and 'naming' are two entries.
    """
    tag_set = set()
    for project in projects:
        tag_set.update(project.tags)
    return sorted(tag_set)


def matches_search(project: Project, search_term: str) -> bool:
    """
    Check a project against the search term.

    The term is not trimmed. An empty term matches every project; otherwise the
    lower-cased term must be a substring of the name, the description or any tag.
    """
    if search_term == '':
        return True

    term = search_term.lower()
    return (
        term in project.name.lower() or
        term in project.description.lower() or
        any(term in tag.lower() for tag in project.tags)
    )


def matches_tags(project: Project, selected_tags: Iterable[str]) -> bool:
    """
    Check a project against the selected tags.

    Every selected tag must equal one of the project's tags, ignoring case.
    No selection matches every project.
    """
    project_tags = {tag.lower() for tag in project.tags}
    return all(tag.lower() in project_tags for tag in selected_tags)


def filter_projects(projects: Iterable[Project], search_term: str,
                    selected_tags: Iterable[str]) -> List[Project]:
    """
    Return the projects passing both the search and the tag predicate,
    in original catalog order.
    """
    selected_tags = list(selected_tags)
    return [
        project for project in projects
        if matches_search(project, search_term) and matches_tags(project, selected_tags)
    ]


class CatalogFilter:
    """
    Holds the catalog, its tag vocabulary and one visitor's filter state.

    The vocabulary is derived once per catalog. The visible projects are
    recomputed from the current state on demand.
    """

    def __init__(self, projects: List[Project], state: Optional[FilterState] = None,
                 tag_vocabulary: Optional[List[str]] = None):
        """
        Initialize filter over a fixed catalog.

        Args:
            projects: Catalog in display order
            state: Existing filter state to adopt (e.g. posted with a request)
            tag_vocabulary: Precomputed vocabulary for this catalog, if already known
        """
        self.projects = list(projects)
        self.state = state.copy() if state is not None else FilterState()

        if tag_vocabulary is None:
            tag_vocabulary = get_all_unique_tags(self.projects)
        self.tag_vocabulary = list(tag_vocabulary)

        self._cache_key: Optional[Tuple[str, FrozenSet[str]]] = None
        self._cache_value: List[Project] = []

    # ------------------------------------------------------------------
    # State mutation
    # ------------------------------------------------------------------

    def set_search_term(self, text: str) -> None:
        """Replace the search term verbatim"""
        self.state.search_term = text

    def toggle_tag(self, tag: str) -> None:
        """Select the tag if it is not selected, otherwise deselect it"""
        if tag in self.state.selected_tags:
            self.state.selected_tags.discard(tag)
            logger.debug(f"Tag deselected: {tag}")
        else:
            self.state.selected_tags.add(tag)
            logger.debug(f"Tag selected: {tag}")

    def clear_tags(self) -> None:
        """Deselect every tag, keeping the search term"""
        self.state.selected_tags = set()

    def clear_all(self) -> None:
        """Reset the search term and the tag selection together"""
        self.state = FilterState()

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def visible_projects(self) -> List[Project]:
        """Projects matching the current state, in catalog order"""
        key = (self.state.search_term, frozenset(self.state.selected_tags))
        if key != self._cache_key:
            self._cache_value = filter_projects(self.projects, key[0], key[1])
            self._cache_key = key
        return list(self._cache_value)

    def is_tag_selected(self, tag: str) -> bool:
        return tag in self.state.selected_tags

    def tag_chips(self) -> List[Dict[str, Any]]:
        """Vocabulary entries paired with their selected flag, for rendering"""
        return [
            {'tag': tag, 'selected': self.is_tag_selected(tag)}
            for tag in self.tag_vocabulary
        ]

    def get_project_count(self) -> int:
        """Get total number of projects in the catalog"""
        return len(self.projects)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'CatalogFilter':
        """
        Create CatalogFilter from configuration dict.

        Args:
            config: Full configuration dictionary

        Returns:
            CatalogFilter over the configured catalog with a fresh state
        """
        projects = load_catalog(config.get('catalog_path', ''))
        return cls(projects)
