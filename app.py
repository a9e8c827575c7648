import logging
import math

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import Settings, settings as env_settings
from calculator import compute, parse_input
from errors import ApiError, InternalError, MissingParameters, StoreUnavailable
from models import db
from store import SimulationStore

log = logging.getLogger(__name__)


def _json_number(val):
    # JSON has no NaN/Infinity
    if isinstance(val, float) and not math.isfinite(val):
        return None
    return val


def _payload():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def create_app(settings: Settings = None) -> Flask:
    settings = settings or env_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config['SECRET_KEY'] = settings.SECRET_KEY
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    origins = settings.CORS_ORIGINS
    if origins != "*":
        origins = [o.strip() for o in origins.split(",") if o.strip()]
    CORS(app, resources={r"/api/*": {"origins": origins}})

    store = SimulationStore(settings.DATABASE_URI)
    app.extensions['simulation_store'] = store

    if store.configured:
        app.config['SQLALCHEMY_DATABASE_URI'] = settings.DATABASE_URI
        db.init_app(app)
        with app.app_context():
            try:
                store.ensure_schema()
            except InternalError:
                log.warning("Database not reachable at start-up; will retry on first use")
        log.info("Simulation history enabled")
    else:
        log.info("DATABASE_URI not set; simulation history disabled")

    @app.errorhandler(ApiError)
    def api_error(e: ApiError):
        return jsonify(e.to_dict()), e.status

    @app.errorhandler(Exception)
    def unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return e
        log.exception("Unhandled error on %s %s", request.method, request.path)
        err = InternalError()
        return jsonify(err.to_dict()), err.status

    @app.route('/api/calculate', methods=['POST'])
    def calculate():
        inp = parse_input(_payload())
        result = compute(inp)
        return jsonify({k: _json_number(v) for k, v in result.as_dict().items()})

    @app.route('/api/simulations', methods=['GET'])
    def list_simulations():
        return jsonify(store.list())

    @app.route('/api/simulations', methods=['POST'])
    def save_simulation():
        if not store.configured:
            # answer before looking at the body
            raise StoreUnavailable()
        try:
            inp = parse_input(_payload())
        except MissingParameters as e:
            log.warning("Refusing to save simulation, missing %s", ", ".join(e.missing))
            raise InternalError() from e
        return jsonify(store.save(inp))

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok", "persistence": store.configured})

    return app


app = create_app()

if __name__ == '__main__':
    app.run(host=env_settings.HOST, port=env_settings.PORT)
