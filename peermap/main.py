import os
from flask import Flask, jsonify
from config.config import config
from peermap.database import Database
from peermap.routes import response_maps, responses
from peermap.utils.logger import setup_logger


def create_app(config_name=None, database=None):
    """Application factory; pass database to reuse an existing handle"""
    config_name = config_name or os.environ.get('FLASK_ENV', 'default')
    config_class = config.get(config_name, config['default'])

    app = Flask(__name__)
    app.config.from_object(config_class)

    logger = setup_logger()

    if database is None:
        database = Database(config_class.DATABASE_URL)
        database.init_db()
    app.extensions['database'] = database

    prefix = config_class.API_PREFIX
    app.register_blueprint(response_maps.bp, url_prefix=f'{prefix}/response_maps')
    app.register_blueprint(responses.bp, url_prefix=f'{prefix}/responses')

    @app.route(f'{prefix}/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok'}), 200

    logger.info(f"PeerMap app created with '{config_name}' config")
    return app
