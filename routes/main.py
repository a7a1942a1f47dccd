from flask import Blueprint, jsonify, request, redirect, current_app

from models import CLASS_SESSIONS
from utils.endpoint_config import CONFIG_PARAM, InvalidEndpointError, import_from_param

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Studio details and the bookable classes.

    A provisioning link (?cfg=<base64 url>) stores the spreadsheet endpoint
    and then redirects to the same page without the parameter.
    """
    encoded = request.args.get(CONFIG_PARAM)
    if encoded:
        try:
            import_from_param(encoded)
        except InvalidEndpointError:
            current_app.logger.error("Invalid configuration parameter")
        else:
            return redirect(request.base_url)

    return jsonify({
        'studio': current_app.config['STUDIO_INFO'],
        'price_per_class': current_app.config['PRICE_PER_CLASS'],
        'classes': [s.to_dict() for s in CLASS_SESSIONS],
    })
