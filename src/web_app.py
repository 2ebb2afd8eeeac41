"""
Miden Ecosystem Directory - Web Application
Flask backend serving the directory page and its filter API

The server keeps no filter state. The page owns its search term and tag
selection and sends them with every request.
"""

import os
import sys
from datetime import datetime
from typing import Dict, Any, List, Optional
from flask import Blueprint, Flask, current_app, jsonify, request, send_from_directory
from flask_cors import CORS

# Add src directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from catalog_filter import CatalogFilter
from config_manager import ConfigManager
from logger import setup_logging, get_logger
from models import FilterState, Project

# Initialize logging
setup_logging()
logger = get_logger('web_app')

WEB_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'web')

bp = Blueprint('directory', __name__)


# ============================================================================
# REQUEST STATE
# ============================================================================

def get_catalog_filter(state: Optional[FilterState] = None) -> CatalogFilter:
    """Build an engine over the shared catalog with the caller's state"""
    return CatalogFilter(
        current_app.config['CATALOG_PROJECTS'],
        state=state,
        tag_vocabulary=current_app.config['TAG_VOCABULARY']
    )


def build_view(catalog_filter: CatalogFilter) -> Dict[str, Any]:
    """Everything the page needs to render the chips and the result grid"""
    visible = catalog_filter.visible_projects()
    return {
        'success': True,
        'site_title': current_app.config['SITE_TITLE'],
        'filter': catalog_filter.state.to_dict(),
        'tags': catalog_filter.tag_chips(),
        'projects': [project.to_dict() for project in visible],
        'visible_count': len(visible),
        'total_count': catalog_filter.get_project_count()
    }


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_filter_payload(data) -> List[str]:
    """Validate the filter state sent with a request"""
    errors = []
    if not isinstance(data, dict):
        errors.append('Request body must be a JSON object')
        return errors

    search_term = data.get('search_term', '')
    if not isinstance(search_term, str):
        errors.append('Search term must be a string')

    selected_tags = data.get('selected_tags', [])
    if not isinstance(selected_tags, list):
        errors.append('Selected tags must be a list')
    elif not all(isinstance(tag, str) for tag in selected_tags):
        errors.append('Selected tags must be strings')

    return errors


def validate_search_payload(data) -> List[str]:
    """Validate a search term update"""
    errors = validate_filter_payload(data)
    if errors:
        return errors
    if 'term' not in data:
        errors.append('Search term is required')
    elif not isinstance(data['term'], str):
        errors.append('Search term must be a string')
    return errors


def validate_tag_payload(data) -> List[str]:
    """Validate a tag toggle"""
    errors = validate_filter_payload(data)
    if errors:
        return errors
    if 'tag' not in data:
        errors.append('Tag is required')
    elif not isinstance(data['tag'], str):
        errors.append('Tag must be a string')
    elif data['tag'] == '':
        errors.append('Tag cannot be empty')
    return errors


def bad_request(errors: List[str]):
    return jsonify({'success': False, 'error': '; '.join(errors)}), 400


# ============================================================================
# STATIC FILES
# ============================================================================

@bp.route('/')
def serve_index():
    """Serve the directory page"""
    return send_from_directory(current_app.static_folder, 'index.html')


# ============================================================================
# FILTER API
# ============================================================================

@bp.route('/api/filter', methods=['GET'])
def get_initial_view():
    """Initial view: empty search term, no tags selected"""
    return jsonify(build_view(get_catalog_filter()))


@bp.route('/api/filter', methods=['POST'])
def evaluate_filter():
    """Visible projects for the posted filter state"""
    data = request.get_json(silent=True)
    errors = validate_filter_payload(data)
    if errors:
        return bad_request(errors)

    return jsonify(build_view(get_catalog_filter(FilterState.from_dict(data))))


@bp.route('/api/filter/search', methods=['POST'])
def set_search():
    """Replace the search term of the posted state"""
    data = request.get_json(silent=True)
    errors = validate_search_payload(data)
    if errors:
        return bad_request(errors)

    catalog_filter = get_catalog_filter(FilterState.from_dict(data))
    catalog_filter.set_search_term(data['term'])
    return jsonify(build_view(catalog_filter))


@bp.route('/api/filter/tags/toggle', methods=['POST'])
def toggle_tag():
    """Select or deselect one tag chip in the posted state"""
    data = request.get_json(silent=True)
    errors = validate_tag_payload(data)
    if errors:
        return bad_request(errors)

    catalog_filter = get_catalog_filter(FilterState.from_dict(data))
    catalog_filter.toggle_tag(data['tag'])
    return jsonify(build_view(catalog_filter))


@bp.route('/api/filter/tags/clear', methods=['POST'])
def clear_tags():
    """Deselect all tag chips, keeping the search term"""
    data = request.get_json(silent=True)
    errors = validate_filter_payload(data)
    if errors:
        return bad_request(errors)

    catalog_filter = get_catalog_filter(FilterState.from_dict(data))
    catalog_filter.clear_tags()
    return jsonify(build_view(catalog_filter))


@bp.route('/api/filter/clear', methods=['POST'])
def clear_all():
    """Reset the search term and the tag selection"""
    catalog_filter = get_catalog_filter()
    catalog_filter.clear_all()
    return jsonify(build_view(catalog_filter))


# ============================================================================
# CATALOG API
# ============================================================================

@bp.route('/api/tags', methods=['GET'])
def get_tags():
    """Tag vocabulary"""
    return jsonify({'success': True, 'tags': current_app.config['TAG_VOCABULARY']})


@bp.route('/api/projects', methods=['GET'])
def get_projects():
    """Full catalog, unfiltered"""
    projects = current_app.config['CATALOG_PROJECTS']
    return jsonify({
        'success': True,
        'projects': [project.to_dict() for project in projects],
        'total_count': len(projects)
    })


# ============================================================================
# UTILITY API
# ============================================================================

@bp.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'success': True,
        'status': 'healthy',
        'projects': len(current_app.config['CATALOG_PROJECTS']),
        'timestamp': datetime.now().isoformat()
    })


# ============================================================================
# ERROR HANDLERS
# ============================================================================

def not_found(e):
    """Handle 404 errors"""
    # For API routes, return JSON
    if request.path.startswith('/api/'):
        return jsonify({'success': False, 'error': 'Endpoint not found'}), 404

    # For other routes, serve index.html (SPA fallback)
    return send_from_directory(current_app.static_folder, 'index.html')


def internal_error(e):
    """Handle 500 errors"""
    logger.error(f"Unhandled error on {request.path}: {e}", exc_info=True)
    return jsonify({'success': False, 'error': 'Internal server error'}), 500


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

def create_app(config_manager: Optional[ConfigManager] = None,
               projects: Optional[List[Project]] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config_manager: Configuration source (default: loaded from disk/env)
        projects: Catalog to serve instead of the configured one

    Returns:
        Configured Flask app
    """
    if config_manager is None:
        config_manager = ConfigManager()
    if projects is None:
        catalog_filter = CatalogFilter.from_config(config_manager.get_all())
    else:
        catalog_filter = CatalogFilter(projects)

    flask_app = Flask(__name__, static_folder=WEB_DIR, static_url_path='')
    flask_app.config['SITE_TITLE'] = config_manager.get('site_title')
    flask_app.config['CATALOG_PROJECTS'] = catalog_filter.projects
    # Catalog never changes after start-up, so the vocabulary is derived once
    flask_app.config['TAG_VOCABULARY'] = catalog_filter.tag_vocabulary

    CORS(flask_app, resources={r'/api/*': {'origins': config_manager.get('cors_origins', '*')}})

    flask_app.register_blueprint(bp)
    flask_app.register_error_handler(404, not_found)
    flask_app.register_error_handler(500, internal_error)

    logger.info(f"Serving {catalog_filter.get_project_count()} projects with "
                f"{len(catalog_filter.tag_vocabulary)} tags")
    return flask_app


# ============================================================================
# APPLICATION STARTUP
# ============================================================================

if __name__ == '__main__':
    config_manager = ConfigManager()
    app = create_app(config_manager)

    port = config_manager.get('port', 5000)
    logger.info("=" * 60)
    logger.info("MIDEN ECOSYSTEM DIRECTORY - WEB APPLICATION STARTING")
    logger.info("=" * 60)
    logger.info(f"Server port: {port}")
    logger.info(f"Log level: {os.getenv('LOG_LEVEL', 'INFO')}")
    logger.info(f"Catalog: {config_manager.get('catalog_path') or 'built-in'}")
    logger.info("=" * 60)

    app.run(host=config_manager.get('host', '0.0.0.0'), port=port, debug=False, threaded=True)
