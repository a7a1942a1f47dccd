import hmac
from functools import wraps

from flask import Blueprint, jsonify, request, session, current_app

auth_bp = Blueprint('auth', __name__)


def admin_required(view_func):
    """Only let the instructor through to the dashboard."""
    @wraps(view_func)
    def wrapped(*args, **kwargs):
        if not session.get('is_admin'):
            return jsonify({'error': 'Instructor login required'}), 401
        return view_func(*args, **kwargs)
    return wrapped


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True)
    password = data.get('password') if isinstance(data, dict) else None
    if not isinstance(password, str):
        password = ''

    expected = current_app.config['ADMIN_PASSWORD']
    if not password or not hmac.compare_digest(password.encode('utf-8'), expected.encode('utf-8')):
        current_app.logger.warning("Failed dashboard login attempt")
        return jsonify({'error': 'Incorrect password, please try again'}), 401

    session['is_admin'] = True
    return jsonify({'success': True})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    session.pop('is_admin', None)
    return jsonify({'success': True})


@auth_bp.route('/status')
def status():
    return jsonify({'authenticated': bool(session.get('is_admin'))})
