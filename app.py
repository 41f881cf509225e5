"""Flask web application for the Profile Enrichment Service."""

import logging
import threading
from datetime import datetime, timezone

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.serving import make_server

from profile_enricher.services import EnrichmentService, ValidationError
from profile_enricher.web_scraper import EnrichmentError
from config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT, SERVICE_NAME

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = ['POST /users/enrich', 'GET /health']

api = Blueprint('api', __name__)


def configure_logging(level=LOG_LEVEL):
    """Configure root logging once per process."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def _iso_timestamp():
    """UTC timestamp like 2024-01-01T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@api.route('/users/enrich', methods=['POST'])
def enrich_user():
    """Scrape the submitted profile URL and return the merged profile."""
    data = request.get_json(silent=True)
    logger.info('[api] enrich received body=%s', data)

    service = current_app.extensions['enrichment_service']
    try:
        profile = service.enrich(data)
    except ValidationError as e:
        logger.info('[api] enrich rejected reason=%s', e)
        return jsonify(e.to_dict()), 400
    except EnrichmentError as e:
        logger.error('[api] enrich failed details=%s', e)
        return jsonify({
            'error': 'Failed to enrich user profile',
            'details': str(e),
        }), 500

    logger.info('[api] enrich responded username=%s', profile.username)
    return jsonify(profile.to_dict()), 201


@api.route('/health', methods=['GET'])
def health():
    """Liveness check."""
    return jsonify({
        'status': 'OK',
        'timestamp': _iso_timestamp(),
        'service': current_app.config['SERVICE_NAME'],
    }), 200


def _endpoint_not_found(e):
    # Wrong method on a known path is reported the same way as an unknown path
    return jsonify({
        'error': 'Endpoint not found',
        'availableEndpoints': list(AVAILABLE_ENDPOINTS),
    }), 404


def _http_error(e):
    return jsonify({'error': e.name, 'details': e.description}), e.code


def _internal_error(e):
    logger.exception('[api] unhandled error: %s', e)
    return jsonify({
        'error': 'Internal server error',
        'details': str(e),
    }), 500


def create_app(enrichment_service=None, **config_overrides):
    """Build the Flask application.

    Args:
        enrichment_service: Pipeline used by POST /users/enrich. If None, a
            default EnrichmentService is created.
        **config_overrides: Extra Flask config values (e.g. TESTING=True).
    """
    configure_logging()

    app = Flask(__name__)
    app.config['SERVICE_NAME'] = SERVICE_NAME
    app.config.update(config_overrides)
    app.json.sort_keys = False

    CORS(app, origins=CORS_ORIGINS)

    app.extensions['enrichment_service'] = enrichment_service or EnrichmentService()
    app.register_blueprint(api)

    app.register_error_handler(404, _endpoint_not_found)
    app.register_error_handler(405, _endpoint_not_found)
    app.register_error_handler(HTTPException, _http_error)
    app.register_error_handler(Exception, _internal_error)
    return app


class ServerHandle:
    """A running WSGI server owned by the caller."""

    def __init__(self, server):
        self._server = server
        self._thread = threading.Thread(target=server.serve_forever, name='profile-enricher', daemon=True)

    @property
    def host(self):
        return self._server.server_address[0]

    @property
    def port(self):
        return self._server.server_address[1]

    @property
    def url(self):
        host = 'localhost' if self.host in ('0.0.0.0', '::') else self.host
        return f'http://{host}:{self.port}'

    @property
    def running(self):
        return self._thread.is_alive()

    def start(self):
        self._thread.start()
        logger.info('[server] %s listening on %s', SERVICE_NAME, self.url)
        for endpoint in AVAILABLE_ENDPOINTS:
            method, path = endpoint.split(' ', 1)
            logger.info('[server]   %-4s %s%s', method, self.url, path)
        return self

    def wait(self, timeout=None):
        """Block until the server thread exits (or timeout elapses)."""
        self._thread.join(timeout)

    def stop(self):
        """Stop accepting requests and release the socket."""
        # shutdown() waits for serve_forever and would hang if it never ran
        if self._thread.is_alive():
            self._server.shutdown()
            self._thread.join()
        self._server.server_close()
        logger.info('[server] stopped')


def start_server(host=HOST, port=PORT, app=None):
    """Bind and serve in a background thread; port 0 picks a free port."""
    server = make_server(host, port, app or create_app(), threaded=True)
    return ServerHandle(server).start()


app = create_app()


if __name__ == '__main__':
    handle = start_server()
    try:
        handle.wait()
    except KeyboardInterrupt:
        handle.stop()
