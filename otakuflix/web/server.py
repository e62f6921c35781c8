"""Flask web server exposing episode resolution to the app."""
import logging
import os
from typing import Any, Dict, List, Optional

from flask import Flask, request, jsonify

from otakuflix.episodes.resolver import EpisodeResolver, InvalidRequestError
from otakuflix.providers.filehost import build_embed_url

logger = logging.getLogger(__name__)

# Application version - update this when making changes
APP_VERSION = "1.0.0"

# Resolver is created lazily so the TVDB state (token, show cache) lives for the process
_resolver = None


def get_resolver() -> EpisodeResolver:
    """Get or create the episode resolver instance."""
    global _resolver
    if _resolver is None:
        _resolver = EpisodeResolver()
    return _resolver


def _as_list(value: Any) -> Optional[List[str]]:
    """Accept a JSON list or a comma-separated string."""
    if value is None:
        return None
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    if isinstance(value, (list, tuple)):
        return [str(part) if part is not None else '' for part in value]
    return None


def _read_episode_request() -> Dict[str, Any]:
    if request.method == 'POST':
        data = request.get_json(silent=True) or {}
    else:
        data = request.args.to_dict()
    return {
        'anime_id': data.get('animeId'),
        'anime_name': data.get('animeName'),
        'provider_ids': _as_list(data.get('providerIds')),
        'providers': _as_list(data.get('providers')),
    }


def format_episodes(episodes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Add player URLs to every server entry."""
    for episode in episodes:
        for server in episode.get('servers', []):
            embed_url = build_embed_url(server.get('provider', ''), server.get('file_code', ''))
            if embed_url:
                server['embed_url'] = embed_url
    return episodes


def create_app(resolver: Optional[EpisodeResolver] = None) -> Flask:
    """
    Create and configure Flask app.

    Args:
        resolver: Optional resolver, mainly for tests

    Returns:
        Flask application
    """
    app = Flask(__name__)

    def current_resolver() -> EpisodeResolver:
        return resolver or get_resolver()

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return jsonify({'status': 'ok', 'version': APP_VERSION})

    @app.route('/api/episodes', methods=['GET', 'POST'])
    def get_episodes():
        """Resolve the episode list of an anime."""
        params = _read_episode_request()
        try:
            episodes = current_resolver().get_episodes(**params)
            return jsonify({'episodes': format_episodes(episodes)})
        except InvalidRequestError as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            logger.error(f"Error resolving episodes: {e}", exc_info=True)
            return jsonify({'error': 'Internal server error'}), 500

    return app


def run_server(host: str = "0.0.0.0", port: int = 8080, debug: bool = False):
    """Run the Flask server."""
    # Ensure debug mode is disabled in production
    is_production = os.getenv('FLASK_ENV', 'production').lower() != 'development'
    debug_mode = debug and not is_production

    if is_production:
        logger.info(f"Starting Flask web server in PRODUCTION mode on {host}:{port}")
    else:
        logger.info(f"Starting Flask web server in DEVELOPMENT mode on {host}:{port}")

    app = create_app()
    try:
        app.run(host=host, port=port, debug=debug_mode, use_reloader=False)
    except OSError as e:
        if "Address already in use" in str(e):
            logger.error(f"Port {port} is already in use. Please choose a different port or stop the service using it.")
        elif "Permission denied" in str(e):
            logger.error(f"Permission denied to bind to port {port}. Use a port > 1024.")
        else:
            logger.error(f"Failed to start Flask server: {e}")
        raise
