"""Flask application factory."""
import logging
import os
import traceback

from flask import Flask, jsonify
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from weighbridge.database import init_db, get_session


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    log_level = app.config.get('LOG_LEVEL', 'INFO')
    logging.basicConfig(level=log_level, format='%(asctime)s %(levelname)s [%(name)s] %(message)s')
    app.logger.setLevel(log_level)

    # Initialize Sentry for error tracking in production
    if app.config.get('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            environment=app.config.get('ENV', 'production'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Gate and management frontends live on other origins
    CORS(app, resources={r"/api/*": {"origins": app.config.get('CORS_ORIGINS', [])}})

    # Setup Prometheus metrics instrumentation
    from weighbridge.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Production: Enable ProxyFix behind the reverse proxy
    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=0)

    # Initialize database
    engine = init_db(app)

    # Probe optional order columns once; services receive the flags explicitly
    from weighbridge.services.schema_service import detect_optional_columns
    app.extensions['schema_flags'] = detect_optional_columns(engine)

    from weighbridge.services.order_number_service import build_allocator, STRATEGY_MAX_SCAN
    allocator = build_allocator(app.config)
    app.extensions['order_number_allocator'] = allocator
    app.logger.info(
        f"Order numbers: strategy={allocator.strategy} "
        f"format={allocator.prefix}-{'0' * allocator.pad_width}"
    )
    if allocator.strategy == STRATEGY_MAX_SCAN:
        app.logger.warning(
            "Order numbers use MAX()+1 without locking; concurrent creates without "
            "an order_number may collide (set ORDER_NUMBER_STRATEGY=counter)"
        )

    # Error Handlers
    from weighbridge.exceptions import WeighbridgeError

    @app.errorhandler(WeighbridgeError)
    def handle_weighbridge_error(error):
        """Handle custom application exceptions."""
        app.logger.warning(f"WeighbridgeError [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        """Constraint violations, lost connections: pass the driver message through."""
        get_session().rollback()
        message = str(getattr(error, 'orig', None) or error)
        app.logger.error(f"Database error: {message}")
        return jsonify({'status': 'error', 'error': message, 'message': message}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'status': 'error', 'error': error.description, 'message': error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({'status': 'error', 'error': 'Internal Server Error', 'message': 'Internal Server Error'}), 500

    # Register blueprints
    from weighbridge.blueprints.main import main_bp
    from weighbridge.blueprints.orders import orders_bp
    from weighbridge.blueprints.drivers import drivers_bp
    from weighbridge.blueprints.companies import companies_bp
    from weighbridge.blueprints.metrics import metrics_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(drivers_bp)
    app.register_blueprint(companies_bp)
    app.register_blueprint(metrics_bp)

    # Register CLI commands
    from weighbridge.cli_commands import init_cli_commands
    init_cli_commands(app)

    return app
