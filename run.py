import logging
import os
import sys

from tour_events.config import IS_PRODUCTION_ENVIRONMENT
from tour_events.web import create_app

logger = logging.getLogger(__name__)

app = create_app()

def serve_with_gunicorn(port: int):
    """Serve the app with Gunicorn (installed via the 'production' extra)."""
    from gunicorn.app.base import BaseApplication

    class EventsSiteServer(BaseApplication):
        def __init__(self, application, options=None):
            self.options = options or {}
            self.application = application
            super().__init__()

        def load_config(self):
            for key, value in self.options.items():
                self.cfg.set(key.lower(), value)

        def load(self):
            return self.application

    options = {
        'bind': f'0.0.0.0:{port}',
        'workers': os.environ.get('GUNICORN_WORKERS', '2'),
        'worker_class': 'sync',
        # Backend calls are bounded by API_TIMEOUT
        'timeout': app.config['API_TIMEOUT'] + 30,
    }
    EventsSiteServer(app, options).run()

if __name__ == '__main__':
    """
    ENVIRONMENT=production serves the site with Gunicorn on 0.0.0.0,
    anything else starts the Flask development server on localhost
    (FLASK_DEBUG=true enables the debugger and auto-reload).

    SECRET_KEY must be set in production: the admin token is kept in the
    signed session cookie.
    """
    port = int(os.environ.get('PORT', 5001))

    if not IS_PRODUCTION_ENVIRONMENT:
        app.run(host='localhost', port=port, debug=app.config['DEBUG'])
        sys.exit(0)

    if app.config['SECRET_KEY'] == 'dev':
        logger.warning("SECRET_KEY is not set, admin sessions are signed with the development key")

    try:
        serve_with_gunicorn(port)
    except ImportError:
        logger.error("Gunicorn is required for production mode, install it with: pip install 'tour-events[production]'")
        sys.exit(1)
