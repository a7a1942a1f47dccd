import io
from datetime import date

from flask import Blueprint, jsonify, request, send_file, url_for, current_app

from routes.auth import admin_required
from utils.csv_export import build_registrations_csv, export_filename
from utils.endpoint_config import (
    InvalidEndpointError, build_share_link, resolve, save_url
)
from utils.local_cache import LocalCache
from utils.remote_client import RemoteEndpointClient
from utils.script_template import APPS_SCRIPT_TEMPLATE, SHEET_COLUMNS
from utils.summary import generate_class_summary
from utils.sync import SyncCoordinator

dashboard_bp = Blueprint('dashboard', __name__)


def group_registrations(registrations, tz_name=None):
    """Group by class day, then by class, with days in date order."""
    grouped = {}
    for reg in registrations:
        day = reg.class_day(tz_name)
        classes = grouped.setdefault(day, {})
        group = classes.setdefault(reg.class_id, {
            'classId': reg.class_id,
            'className': reg.class_name,
            'classDate': reg.class_date,
            'students': [],
        })
        group['students'].append(reg.to_dict())

    return [
        {'date': day, 'classes': list(grouped[day].values())}
        for day in sorted(grouped)
    ]


def current_settings():
    config = current_app.config
    return resolve(config['DEFAULT_SCRIPT_URL'], config['REMOTE_TIMEOUT'])


@dashboard_bp.route('/', methods=['GET'])
@admin_required
def get_dashboard():
    """All registrations plus where they were read from."""
    settings = current_settings()
    result = SyncCoordinator(settings).read()
    tz_name = current_app.config['STUDIO_TIMEZONE']

    return jsonify({
        'registrations': [reg.to_dict() for reg in result.registrations],
        'count': len(result.registrations),
        'groups': group_registrations(result.registrations, tz_name),
        'connection': result.status_dict(),
        'apiUrl': settings.api_url,
    })


@dashboard_bp.route('/export.csv', methods=['GET'])
@admin_required
def export_csv():
    result = SyncCoordinator(current_settings()).read()
    data = build_registrations_csv(result.registrations, current_app.config['STUDIO_TIMEZONE'])
    return send_file(
        io.BytesIO(data),
        as_attachment=True,
        download_name=export_filename(date.today()),
        mimetype='text/csv; charset=utf-8'
    )


@dashboard_bp.route('/summary', methods=['POST'])
@admin_required
def class_summary():
    """Ask Gemini for a message summarising one class."""
    data = request.get_json(silent=True) or {}
    class_id = data.get('classId')
    class_day = data.get('classDate')

    if not class_id:
        return jsonify({'error': 'classId is required'}), 400

    tz_name = current_app.config['STUDIO_TIMEZONE']
    students = [
        reg for reg in LocalCache().load()
        if reg.class_id == class_id and (not class_day or reg.class_day(tz_name) == class_day[:10])
    ]
    if not students:
        return jsonify({'error': 'No registrations found for this class'}), 404

    summary = generate_class_summary(
        students,
        students[0].class_name,
        students[0].class_day(tz_name),
        api_key=current_app.config['GEMINI_API_KEY'],
        model=current_app.config['SUMMARY_MODEL'],
        language=current_app.config['SUMMARY_LANGUAGE'],
    )
    return jsonify({'classId': class_id, 'text': summary})


@dashboard_bp.route('/settings', methods=['GET'])
@admin_required
def get_settings():
    settings = current_settings()
    return jsonify({
        'apiUrl': settings.api_url,
        'isDefault': settings.api_url == current_app.config['DEFAULT_SCRIPT_URL'],
    })


@dashboard_bp.route('/settings', methods=['POST'])
@admin_required
def update_settings():
    data = request.get_json(silent=True) or {}
    try:
        api_url = save_url(data.get('apiUrl'))
    except InvalidEndpointError as e:
        return jsonify({'error': str(e)}), 400

    current_app.logger.info("Endpoint URL updated")
    return jsonify({'success': True, 'apiUrl': current_settings().api_url, 'saved': api_url})


@dashboard_bp.route('/settings/test', methods=['POST'])
@admin_required
def test_settings():
    settings = current_settings()
    if not settings.is_configured:
        return jsonify({'success': False, 'message': 'No endpoint URL configured'}), 400

    ok, message = RemoteEndpointClient(settings.api_url, timeout=settings.timeout).test_connection()
    return jsonify({'success': ok, 'message': message})


@dashboard_bp.route('/settings/script-template', methods=['GET'])
@admin_required
def script_template():
    """Apps Script source to paste into the spreadsheet's script editor."""
    return jsonify({'template': APPS_SCRIPT_TEMPLATE, 'columns': SHEET_COLUMNS})


@dashboard_bp.route('/share-link', methods=['GET'])
@admin_required
def share_link():
    """Registration link that points students' devices at this spreadsheet."""
    settings = current_settings()
    if not settings.is_configured:
        return jsonify({'error': 'Please set and save the Google Script URL first'}), 400

    base_url = url_for('main.index', _external=True)
    return jsonify({'link': build_share_link(base_url, settings.api_url)})


@dashboard_bp.route('/delete-all', methods=['POST'])
@admin_required
def delete_all():
    """Delete every registration, locally and in the spreadsheet."""
    success, error = SyncCoordinator(current_settings()).clear_all()
    if not success:
        return jsonify({'success': False, 'error': error}), 502
    return jsonify({'success': True, 'message': 'All data has been deleted.'})
