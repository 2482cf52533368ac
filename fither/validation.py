import math

MEASUREMENT_FIELDS = ('age', 'height', 'weight', 'neck', 'waist', 'hip')


class ValidationError(Exception):
    """Custom exception for validation errors"""
    pass


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_measurements(data):
    """
    Pull the six body measurements out of a request payload.
    Numeric strings are accepted, anything else raises ValidationError.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    measurements = {}
    for field in MEASUREMENT_FIELDS:
        value = data.get(field)
        if value is None or value == '':
            raise ValidationError(f"{field} is required")
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                raise ValidationError(f"{field} must be a number")
        elif not _is_number(value):
            raise ValidationError(f"{field} must be a number")
        if not math.isfinite(value):
            raise ValidationError(f"{field} must be a number")
        measurements[field] = float(value)
    return measurements


def validate_measurements(measurements):
    """
    Strict check run before a measurement is stored. The formulas themselves
    accept anything, but a body fat estimate only means something when the
    waist and hip are both larger than the neck.
    """
    for field in MEASUREMENT_FIELDS:
        if measurements[field] <= 0:
            raise ValidationError(f"{field} must be greater than 0")

    if measurements['waist'] <= measurements['neck']:
        raise ValidationError("Waist must be larger than neck")
    if measurements['hip'] <= measurements['neck']:
        raise ValidationError("Hip must be larger than neck")


def validate_activity_multiplier(value):
    if not _is_number(value) or not math.isfinite(value):
        raise ValidationError("activity_multiplier must be a number")
    if value <= 0:
        raise ValidationError("activity_multiplier must be greater than 0")
    return float(value)
