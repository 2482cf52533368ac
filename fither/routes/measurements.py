from flask import Blueprint, request, jsonify, g, current_app
from datetime import datetime
import logging

from fither.models.measurement import Measurement
from fither.auth import session_required
from fither.calculations import calculate_composition
from fither.validation import (
    ValidationError,
    parse_measurements,
    validate_measurements,
    validate_activity_multiplier,
)
from fither.app import db

measurements_bp = Blueprint('measurements', __name__)
logger = logging.getLogger(__name__)

# Metrics reported in the history stats
TRACKED_METRICS = (
    'weight',
    'body_fat_percentage',
    'bmi',
    'waist',
    'hip',
    'lean_body_mass',
    'fat_mass',
)


def parse_date(value, field='date'):
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format")


def calculate_change(current, previous):
    change = current - previous
    percent_change = (change / previous * 100) if previous else 0.0
    return {
        'current': current,
        'previous': previous,
        'change': change,
        'percent_change': f"{percent_change:.1f}"
    }


def calculate_history_stats(measurements):
    """
    Summarise a user's measurement history.
    Expects measurements sorted oldest first. Changes compare the latest
    measurement with the one right before it.
    """
    if not measurements:
        return {
            'total_measurements': 0,
            'first_measurement': None,
            'last_measurement': None,
            'changes': {},
            'time_span': None
        }

    first = measurements[0]
    last = measurements[-1]

    changes = {}
    if len(measurements) >= 2:
        previous = measurements[-2]
        for metric in TRACKED_METRICS:
            changes[metric] = calculate_change(getattr(last, metric), getattr(previous, metric))

    return {
        'total_measurements': len(measurements),
        'first_measurement': first.to_dict(),
        'last_measurement': last.to_dict(),
        'changes': changes,
        'time_span': {
            'days': (last.date - first.date).days,
            'first_date': first.date.strftime('%Y-%m-%d'),
            'last_date': last.date.strftime('%Y-%m-%d')
        }
    }


@measurements_bp.route('', methods=['POST'])
@measurements_bp.route('/', methods=['POST'])
@session_required
def add_measurement():
    data = request.get_json(silent=True)

    try:
        measurements = parse_measurements(data)
        validate_measurements(measurements)

        activity_multiplier = data.get('activity_multiplier')
        if activity_multiplier is None:
            activity_multiplier = current_app.config['DEFAULT_ACTIVITY_MULTIPLIER']
        activity_multiplier = validate_activity_multiplier(activity_multiplier)

        measured_on = parse_date(data['date']) if data.get('date') else None
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400

    # Results are always recomputed here, never taken from the client
    composition = calculate_composition(activity_multiplier=activity_multiplier, **measurements)

    entry = Measurement.from_composition(
        user_id=g.current_user.id,
        measurements=measurements,
        composition=composition,
        activity_multiplier=activity_multiplier,
        measured_on=measured_on
    )
    db.session.add(entry)
    db.session.commit()
    logger.info('Saved measurement %s for user %s', entry.id, g.current_user.id)

    result = entry.to_dict()
    result['bmi_classification'] = composition['bmi_classification']
    return jsonify(result), 201


@measurements_bp.route('', methods=['GET'])
@measurements_bp.route('/', methods=['GET'])
@session_required
def get_measurements():
    query = Measurement.query.filter_by(user_id=g.current_user.id)

    try:
        start_date = request.args.get('start_date')
        end_date = request.args.get('end_date')
        if start_date:
            query = query.filter(Measurement.date >= parse_date(start_date, 'start_date'))
        if end_date:
            query = query.filter(Measurement.date <= parse_date(end_date, 'end_date'))
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400

    entries = query.order_by(Measurement.date.desc(), Measurement.id.desc()).all()
    return jsonify({'measurements': [entry.to_dict() for entry in entries]})


@measurements_bp.route('/stats', methods=['GET'])
@session_required
def get_measurement_stats():
    entries = Measurement.query.filter_by(user_id=g.current_user.id).order_by(
        Measurement.date.asc(), Measurement.id.asc()
    ).all()

    return jsonify({'stats': calculate_history_stats(entries)})


@measurements_bp.route('/<int:measurement_id>', methods=['DELETE'])
@session_required
def delete_measurement(measurement_id):
    entry = Measurement.query.filter_by(id=measurement_id, user_id=g.current_user.id).first()
    if not entry:
        return jsonify({'error': 'Measurement not found'}), 404

    db.session.delete(entry)
    db.session.commit()

    return jsonify({'message': 'Measurement deleted successfully'})
