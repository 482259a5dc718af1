# hianime_desktop/app.py
import logging
import os
from functools import partial

from flask import Flask, jsonify, request

from .core.config import Config
from .models.storage import AppStorage
from .routes import api_bp
from .scrapers import HianimeScraper
from .utils import NotificationQueue, PeriodicTask, run_episode_check


def create_app(config_class=Config, scraper=None, storage=None):
    """
    Application factory pattern.

    The scraper and storage are built from config unless passed in, and
    hang off the app as ``anime_scraper`` / ``storage`` for the blueprints.
    """
    app = Flask(__name__, instance_relative_config=False)

    # Load configuration
    app.config.from_object(config_class)

    # Set up logging (use config value if available)
    log_level_name = getattr(config_class, "LOG_LEVEL", None) or os.environ.get("LOG_LEVEL", "INFO")
    log_level = getattr(logging, str(log_level_name).upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logging.basicConfig(level=log_level)

    # Core services
    app.anime_scraper = scraper or HianimeScraper.from_config(config_class)
    app.storage = storage or AppStorage(config_class.STORAGE_PATH)
    app.notifications = NotificationQueue()

    # Background maintenance
    app.cache_sweeper = PeriodicTask(
        "cache-sweep",
        config_class.CACHE_SWEEP_INTERVAL,
        app.anime_scraper.sweep_cache,
    )
    app.episode_checker = PeriodicTask(
        "episode-check",
        config_class.EPISODE_CHECK_INTERVAL,
        partial(
            run_episode_check,
            app.anime_scraper,
            app.storage,
            app.notifications.push_new_episode,
        ),
    )
    if getattr(config_class, "START_SCHEDULER", True):
        app.cache_sweeper.start()
        app.episode_checker.start()

    # Register blueprints
    app.register_blueprint(api_bp, url_prefix='/api')

    # Error handlers
    @app.errorhandler(404)
    def page_not_found(e):
        """Handle 404 errors."""
        app.logger.warning(f"404 error: {request.url}")
        return jsonify(success=False, message="Not found"), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify(success=False, message="Method not allowed"), 405

    @app.errorhandler(500)
    def internal_server_error(e):
        """Handle 500 errors."""
        app.logger.error(f"500 error: {str(e)}")
        return jsonify(success=False, message="Internal server error"), 500

    return app


def main():
    """Run the local backend the desktop shell talks to."""
    app = create_app()
    app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG, use_reloader=False)


if __name__ == '__main__':
    main()
