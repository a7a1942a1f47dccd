import re

from flask import Blueprint, jsonify, request, current_app

from models import Registration, CLASS_SESSIONS, get_class_session
from models.class_session import sessions_in_family, calculate_fee
from models.registration import now_millis
from utils.sync import coordinator_from_config

registration_bp = Blueprint('registration', __name__)

PAYMENT_LAST5_PATTERN = re.compile(r'^\d{5}$')


def parse_paid_flag(value):
    """Only true booleans and 'true' strings mark a registration as paid."""
    if isinstance(value, str):
        return value.strip().lower() == 'true'
    return value is True


@registration_bp.route('/classes', methods=['GET'])
def get_classes():
    """List bookable classes, grouped the way the form shows them."""
    return jsonify({
        'classes': [s.to_dict() for s in CLASS_SESSIONS],
        'yin': [s.to_dict() for s in sessions_in_family('陰瑜伽')],
        'hatha': [s.to_dict() for s in sessions_in_family('哈達')],
    })


@registration_bp.route('/', methods=['POST'])
def submit_registration():
    """Register a student for one or more classes."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    for field in ('studentName', 'lineId'):
        if not isinstance(data.get(field, ''), str):
            return jsonify({'error': f'{field} must be a string'}), 400
    if not isinstance(data.get('paymentLast5') or '', (str, int)):
        return jsonify({'error': 'paymentLast5 must be a string'}), 400

    student_name = (data.get('studentName') or '').strip()
    line_id = (data.get('lineId') or '').strip()
    class_ids = data.get('classIds') or []
    is_paid = parse_paid_flag(data.get('isPaid'))
    payment_last5 = re.sub(r'\D', '', str(data.get('paymentLast5') or ''))

    if not student_name:
        return jsonify({'error': 'studentName is required'}), 400
    if not line_id:
        return jsonify({'error': 'lineId is required'}), 400
    if not isinstance(class_ids, list) or not class_ids:
        return jsonify({'error': 'Please select at least one class'}), 400
    if not all(isinstance(class_id, str) for class_id in class_ids):
        return jsonify({'error': 'classIds must be a list of class ids'}), 400
    if is_paid and not PAYMENT_LAST5_PATTERN.match(payment_last5):
        return jsonify({'error': 'paymentLast5 must be the last five digits of the payment account'}), 400

    # Keep selection order, drop repeats
    selected_ids = list(dict.fromkeys(class_ids))
    sessions = []
    for class_id in selected_ids:
        class_session = get_class_session(class_id)
        if not class_session:
            return jsonify({'error': f'Class not found: {class_id}'}), 404
        sessions.append(class_session)

    timestamp = now_millis()
    new_registrations = [
        Registration.create(
            student_name, line_id, class_session, is_paid,
            payment_last5=payment_last5 or None, timestamp=timestamp
        )
        for class_session in sessions
    ]

    cloud_error = coordinator_from_config(current_app.config).write(new_registrations)

    response = {
        'success': True,
        'registrations': [reg.to_dict() for reg in new_registrations],
        'total': calculate_fee(selected_ids, current_app.config['PRICE_PER_CLASS']),
    }
    if cloud_error:
        response['cloudError'] = cloud_error
    return jsonify(response), 201
