import math

from flask import Blueprint, jsonify, current_app

from fither.calculations import ACTIVITY_MULTIPLIERS, calculate_composition
from fither.validation import MEASUREMENT_FIELDS
from fither.auth import request_json

calculator_bp = Blueprint('calculator', __name__)


def _to_number(value):
    """Lenient conversion for live form input: anything unusable counts as 0."""
    if isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return number if math.isfinite(number) else 0


@calculator_bp.route('/compute', methods=['POST'])
def compute():
    """Compute body composition for a possibly incomplete form. Nothing is stored."""
    data = request_json()

    measurements = {field: _to_number(data.get(field)) for field in MEASUREMENT_FIELDS}

    activity_multiplier = _to_number(data.get('activity_multiplier'))
    if activity_multiplier <= 0:
        activity_multiplier = current_app.config['DEFAULT_ACTIVITY_MULTIPLIER']

    return jsonify(calculate_composition(activity_multiplier=activity_multiplier, **measurements))


@calculator_bp.route('/activity-levels', methods=['GET'])
def activity_levels():
    return jsonify({
        'activity_levels': ACTIVITY_MULTIPLIERS,
        'default': current_app.config['DEFAULT_ACTIVITY_MULTIPLIER']
    })
