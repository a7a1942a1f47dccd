from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

def init_app(app):
    db.init_app(app)
    # Import models to register them with SQLAlchemy
    from .stored_value import StoredValue
    with app.app_context():
        db.create_all()
