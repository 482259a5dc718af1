"""
API routes package
Exports all API blueprints and aggregates them into api_bp
"""
from flask import Blueprint

from .catalog_api import catalog_api_bp
from .library_api import library_api_bp
from .settings_api import settings_api_bp

api_bp = Blueprint('api', __name__)

api_bp.register_blueprint(catalog_api_bp, url_prefix='')
api_bp.register_blueprint(library_api_bp, url_prefix='')
api_bp.register_blueprint(settings_api_bp, url_prefix='/settings')

__all__ = ['api_bp', 'catalog_api_bp', 'library_api_bp', 'settings_api_bp']
