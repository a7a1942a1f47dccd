from .main import main_bp
from .registration import registration_bp
from .auth import auth_bp
from .dashboard import dashboard_bp

__all__ = ['main_bp', 'registration_bp', 'auth_bp', 'dashboard_bp']
