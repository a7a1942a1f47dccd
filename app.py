from flask import Flask
from models import database
from routes import main_bp, registration_bp, auth_bp, dashboard_bp


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object('config')
    if overrides:
        app.config.update(overrides)

    # Initialize local storage database
    database.init_app(app)

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(registration_bp, url_prefix='/api/registration')
    app.register_blueprint(dashboard_bp, url_prefix='/api/dashboard')

    @app.after_request
    def add_header(response):
        """Add headers to prevent caching."""
        response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
        response.headers['Pragma'] = 'no-cache'
        response.headers['Expires'] = '0'
        return response

    return app


if __name__ == '__main__':
    create_app().run(debug=True, port=5000)
