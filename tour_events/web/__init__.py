from flask import Flask, render_template
from .routes import events_bp, admin_bp
from .routes.common import display_timezone
from ..config import Config
from ..utils.codec import format_display_date, format_display_time
from ..utils.logging_config import setup_logging
import logging

# Module logger
logger = logging.getLogger(__name__)

def create_app(config_class=Config):
    """Create and configure the Flask application."""
    setup_logging()

    # Initialize Flask app
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.setdefault('API_HTTP_SESSION', None)

    # Register blueprints
    app.register_blueprint(events_bp)
    app.register_blueprint(admin_bp)

    # Template filters for the display formats
    @app.template_filter('display_date')
    def display_date_filter(value):
        return format_display_date(value) if value else ''

    @app.template_filter('display_time')
    def display_time_filter(value):
        return format_display_time(value, display_timezone()) if value else ''

    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled error: {error}")
        return render_template('errors/500.html'), 500

    logger.info(f"Web app created, events API at {app.config['API_BASE_URL']}")
    return app
