"""
Library API endpoints
Favorites, watch history, continue watching, search history and downloads
"""
import logging

from flask import Blueprint, request, jsonify, current_app

library_api_bp = Blueprint('library_api', __name__)
logger = logging.getLogger(__name__)


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _anime_from(data):
    """Pull an anime record with an id out of a request body"""
    anime = data.get('anime') if isinstance(data.get('anime'), dict) else data
    if not anime.get('id'):
        return None
    return anime


# ---------- Favorites ----------

@library_api_bp.route('/favorites', methods=['GET'])
def list_favorites():
    return jsonify(current_app.storage.get_favorites())


@library_api_bp.route('/favorites', methods=['POST'])
def add_favorite():
    data = _json_body()
    anime = _anime_from(data) if data else None
    if not anime:
        return jsonify({'error': 'anime with an id is required'}), 400

    added = current_app.storage.add_to_favorites(anime)
    return jsonify({'success': True, 'added': added}), 201 if added else 200


@library_api_bp.route('/favorites/<anime_id>', methods=['GET'])
def get_favorite(anime_id):
    favorite = current_app.storage.get_favorite(anime_id)
    if favorite is None:
        return jsonify({'error': 'Not a favorite'}), 404
    return jsonify(favorite)


@library_api_bp.route('/favorites/<anime_id>', methods=['DELETE'])
def remove_favorite(anime_id):
    if not current_app.storage.remove_from_favorites(anime_id):
        return jsonify({'error': 'Not a favorite'}), 404
    return jsonify({'success': True})


# ---------- Watch history ----------

@library_api_bp.route('/history', methods=['GET'])
def list_history():
    return jsonify(current_app.storage.get_watch_history())


@library_api_bp.route('/history', methods=['POST'])
def add_history():
    data = _json_body()
    anime = _anime_from(data) if data else None
    if not anime:
        return jsonify({'error': 'anime with an id is required'}), 400

    current_app.storage.add_to_watch_history(anime, data.get('episode'))
    return jsonify({'success': True})


@library_api_bp.route('/history', methods=['DELETE'])
def clear_history():
    current_app.storage.clear_watch_history()
    return jsonify({'success': True})


# ---------- Continue watching ----------

@library_api_bp.route('/continue-watching', methods=['GET'])
def list_continue_watching():
    return jsonify(current_app.storage.get_continue_watching())


@library_api_bp.route('/continue-watching', methods=['POST'])
def update_continue_watching():
    data = _json_body()
    anime = _anime_from(data) if data else None
    if not anime:
        return jsonify({'error': 'anime with an id is required'}), 400

    try:
        progress = float(data.get('progress', 0))
    except (TypeError, ValueError):
        return jsonify({'error': 'progress must be a number'}), 400

    current_app.storage.add_to_continue_watching(anime, data.get('episode'), progress)
    return jsonify({'success': True})


@library_api_bp.route('/continue-watching/<anime_id>', methods=['DELETE'])
def remove_continue_watching(anime_id):
    current_app.storage.remove_from_continue_watching(anime_id)
    return jsonify({'success': True})


# ---------- Search history ----------

@library_api_bp.route('/search-history', methods=['GET'])
def list_search_history():
    return jsonify(current_app.storage.get_search_history())


@library_api_bp.route('/search-history', methods=['DELETE'])
def clear_search_history():
    current_app.storage.clear_search_history()
    return jsonify({'success': True})


# ---------- Downloads ----------

@library_api_bp.route('/downloads', methods=['GET'])
def list_downloads():
    return jsonify(current_app.storage.get_downloads())


@library_api_bp.route('/downloads', methods=['POST'])
def add_download():
    data = _json_body()
    if not data:
        return jsonify({'error': 'JSON body required'}), 400

    anime = data.get('anime')
    episode = data.get('episode')
    file_path = data.get('filePath', '')
    if not isinstance(anime, dict) or not anime.get('id') or not isinstance(episode, dict):
        return jsonify({'error': 'anime and episode are required'}), 400

    try:
        download = current_app.storage.add_download(
            anime, episode, file_path, data.get('status', 'pending')
        )
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(download), 201


@library_api_bp.route('/downloads/<download_id>', methods=['PATCH'])
def update_download(download_id):
    data = _json_body()
    if not data:
        return jsonify({'error': 'JSON body required'}), 400

    try:
        updated = current_app.storage.update_download(download_id, data)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    if not updated:
        return jsonify({'error': 'Download not found'}), 404
    return jsonify({'success': True})


@library_api_bp.route('/downloads/<download_id>', methods=['DELETE'])
def remove_download(download_id):
    if not current_app.storage.remove_download(download_id):
        return jsonify({'error': 'Download not found'}), 404
    return jsonify({'success': True})


# ---------- Data management ----------

@library_api_bp.route('/stats', methods=['GET'])
def stats():
    return jsonify(current_app.storage.stats())


@library_api_bp.route('/export', methods=['GET'])
def export_data():
    return current_app.response_class(
        current_app.storage.export_data(),
        mimetype='application/json',
    )


@library_api_bp.route('/import', methods=['POST'])
def import_data():
    if not current_app.storage.import_data(request.get_data(as_text=True)):
        return jsonify({'error': 'Invalid data'}), 400
    logger.info("User data imported")
    return jsonify({'success': True})


@library_api_bp.route('/reset', methods=['POST'])
def reset_data():
    current_app.storage.clear_all_data()
    logger.info("User data reset")
    return jsonify({'success': True})


# ---------- Notifications ----------

@library_api_bp.route('/notifications', methods=['GET'])
def pending_notifications():
    """Hand queued new-episode notifications to the shell and forget them"""
    return jsonify(current_app.notifications.drain())
