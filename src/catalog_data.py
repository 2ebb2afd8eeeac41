"""
Catalog Data
Built-in project catalog and loader for an optional JSON catalog file.
"""

import json
from pathlib import Path
from typing import List, Dict, Any, Optional

from logger import get_logger
from models import Project

logger = get_logger('catalog_data')


DEFAULT_CATALOG: List[Dict[str, Any]] = [
    {
        'id': 1,
        'name': 'Miden Name Service',
        'description': 'A decentralized naming system for the Miden ecosystem.',
        'link': 'https://miden-name-service-p55kix6fq-paulhenryks-projects.vercel.app/',
        'imageUrl': 'miden_name_service.png',
        'tags': ['Naming', 'Utility', 'Infrastructure']
    },
]


class CatalogError(Exception):
    """Raised when a catalog file or entry cannot be turned into projects"""


def build_projects(entries: List[Dict[str, Any]]) -> List[Project]:
    """
    Convert raw catalog entries into Project records, preserving order.

    Only 'id' and 'name' are required; everything else is tolerated as missing.

    Raises:
        CatalogError: If an entry is not a mapping or lacks a required field
    """
    projects = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise CatalogError(f"Catalog entry #{idx + 1} is not an object")
        try:
            projects.append(Project.from_dict(entry))
        except KeyError as e:
            raise CatalogError(f"Catalog entry #{idx + 1} is missing required field {e}") from e
        except (TypeError, ValueError) as e:
            raise CatalogError(f"Catalog entry #{idx + 1} is malformed: {e}") from e

    seen_ids = set()
    for project in projects:
        if project.id in seen_ids:
            raise CatalogError(f"Duplicate project id: {project.id}")
        seen_ids.add(project.id)

    return projects


def load_catalog(catalog_path: Optional[str] = None) -> List[Project]:
    """
    Load the project catalog.

    Args:
        catalog_path: Path to a JSON file holding a list of entries, or an
            object with a 'projects' list. Empty or None selects the built-in catalog.

    Returns:
        Projects in catalog order

    Raises:
        CatalogError: If the file exists but cannot be parsed
    """
    if not catalog_path:
        return build_projects(DEFAULT_CATALOG)

    path = Path(catalog_path)
    if not path.exists():
        logger.warning(f"Catalog file {path} not found, using built-in catalog")
        return build_projects(DEFAULT_CATALOG)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read catalog file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get('projects', [])
    if not isinstance(data, list):
        raise CatalogError(f"Catalog file {path} must contain a list of projects")

    projects = build_projects(data)
    logger.info(f"Loaded {len(projects)} projects from {path}")
    return projects
