"""
Settings API endpoints
"""
from flask import Blueprint, request, jsonify, current_app

from ...models.storage import DEFAULT_SETTINGS

settings_api_bp = Blueprint('settings_api', __name__)


@settings_api_bp.route('', methods=['GET'])
def get_settings():
    return jsonify(current_app.storage.get_settings())


@settings_api_bp.route('', methods=['PUT'])
def update_settings():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'JSON object required'}), 400

    current_app.storage.set_settings(data)
    return jsonify(current_app.storage.get_settings())


@settings_api_bp.route('/reset', methods=['POST'])
def reset_settings():
    current_app.storage.reset_settings()
    return jsonify(current_app.storage.get_settings())


@settings_api_bp.route('/<key>', methods=['GET'])
def get_setting(key):
    settings = current_app.storage.get_settings()
    if key not in settings:
        return jsonify({'error': f"Unknown setting '{key}'"}), 404
    return jsonify({'key': key, 'value': settings[key]})


@settings_api_bp.route('/<key>', methods=['PUT'])
def set_setting(key):
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'value' not in data:
        return jsonify({'error': 'value is required'}), 400

    if key not in DEFAULT_SETTINGS and key not in current_app.storage.get_settings():
        current_app.logger.info(f"Storing custom setting '{key}'")
    current_app.storage.set_setting(key, data['value'])
    return jsonify({'key': key, 'value': data['value']})
