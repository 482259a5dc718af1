"""
Catalog API endpoints
Home sections, search, anime details, episode sources, genres and schedule
"""
from flask import Blueprint, request, jsonify, current_app

catalog_api_bp = Blueprint('catalog_api', __name__)


def _page_arg() -> int:
    try:
        return max(1, int(request.args.get('page', 1)))
    except (TypeError, ValueError):
        return 1


@catalog_api_bp.route('/home', methods=['GET'])
async def home():
    """Trending, new releases and ongoing sections in one response"""
    data = await current_app.anime_scraper.home()
    return jsonify({
        "data": data,
        "counts": {key: len(value) for key, value in data.items()},
    })


@catalog_api_bp.route('/trending', methods=['GET'])
async def trending():
    return jsonify(await current_app.anime_scraper.get_trending_anime())


@catalog_api_bp.route('/new-releases', methods=['GET'])
async def new_releases():
    return jsonify(await current_app.anime_scraper.get_new_releases())


@catalog_api_bp.route('/ongoing', methods=['GET'])
async def ongoing():
    return jsonify(await current_app.anime_scraper.get_ongoing_anime())


@catalog_api_bp.route('/search', methods=['GET'])
async def search():
    """Search by keyword and remember the query"""
    query = request.args.get('q', '').strip()
    page = _page_arg()
    if not query:
        return jsonify({"query": "", "page": page, "results": []})

    current_app.storage.add_to_search_history(query)
    results = await current_app.anime_scraper.search_anime(query, page)
    return jsonify({"query": query, "page": page, "results": results})


@catalog_api_bp.route('/anime/<anime_id>', methods=['GET'])
async def anime_details(anime_id):
    details = await current_app.anime_scraper.get_anime_details(anime_id)
    if details is None:
        return jsonify({"error": f"Anime '{anime_id}' not found"}), 404

    return jsonify({
        **details,
        "id": anime_id,
        "isFavorite": current_app.storage.is_favorite(anime_id),
    })


@catalog_api_bp.route('/episodes/<episode_id>/sources', methods=['GET'])
async def episode_sources(episode_id):
    sources = await current_app.anime_scraper.get_episode_sources(episode_id)
    return jsonify({
        **sources,
        "defaultQuality": current_app.storage.get_setting("defaultQuality"),
        "defaultSubtitleLang": current_app.storage.get_setting("defaultSubtitleLang"),
    })


@catalog_api_bp.route('/genres', methods=['GET'])
async def genres():
    return jsonify(await current_app.anime_scraper.get_genres())


@catalog_api_bp.route('/genres/<genre_name>', methods=['GET'])
async def anime_by_genre(genre_name):
    page = _page_arg()
    results = await current_app.anime_scraper.get_anime_by_genre(genre_name, page)
    return jsonify({"genre": genre_name, "page": page, "results": results})


@catalog_api_bp.route('/schedule', methods=['GET'])
async def schedule():
    return jsonify(await current_app.anime_scraper.get_anime_calendar())


@catalog_api_bp.route('/cache/stats', methods=['GET'])
def cache_stats():
    return jsonify(current_app.anime_scraper.cache.stats())


@catalog_api_bp.route('/cache/clear', methods=['POST'])
def cache_clear():
    current_app.anime_scraper.clear_cache()
    current_app.logger.info("Result cache cleared on request")
    return jsonify({"success": True})
