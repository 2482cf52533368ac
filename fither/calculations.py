"""
Body composition formulas.

Every function here is pure: it only looks at its arguments, never raises on
bad input and degrades to 0 instead, so it can be called on half-filled forms.
Strict checks live in fither.validation.
"""
import math

# Minimum safe daily intake for fat-loss targets (kcal)
MIN_CALORIES = 1200

DEFAULT_ACTIVITY_MULTIPLIER = 1.375

# Mifflin-St Jeor activity multipliers
ACTIVITY_MULTIPLIERS = {
    'sedentary': 1.2,      # Little or no exercise
    'light': 1.375,        # Light exercise 1-3 days/week
    'moderate': 1.55,      # Moderate exercise 3-5 days/week
    'active': 1.725,       # Hard exercise 6-7 days/week
    'very_active': 1.9     # Very hard exercise & physical job
}

# (upper bound, category, color); the last band is open-ended
BMI_CLASSIFICATIONS = [
    (18.5, 'underweight', 'blue'),
    (25.0, 'normal', 'green'),
    (30.0, 'overweight', 'yellow'),
    (None, 'obese', 'red'),
]

FAT_LOSS_DEFICITS = (300, 500)


def round_half_up(value):
    """Round to the nearest integer, ties going up (1883.5 -> 1884)."""
    return int(math.floor(value + 0.5))


def calculate_body_fat_percentage(waist, hip, neck, height):
    """
    U.S. Navy method, female coefficients:
    495 / (1.29579 - 0.35004 * log10(waist + hip - neck) + 0.22100 * log10(height)) - 450

    All circumferences and height in cm. Returns a percentage clamped to [0, 100].
    """
    if waist <= 0 or hip <= 0 or neck <= 0 or height <= 0:
        return 0

    circumference = waist + hip - neck
    if circumference <= 0:
        return 0

    denominator = 1.29579 - 0.35004 * math.log10(circumference) + 0.22100 * math.log10(height)
    if denominator == 0:
        return 0

    body_fat = 495 / denominator - 450
    if not math.isfinite(body_fat):
        return 0

    return max(0, min(100, body_fat))


def calculate_bmi(weight, height):
    """Body Mass Index from weight in kg and height in cm."""
    if weight <= 0 or height <= 0:
        return 0

    height_m = height / 100
    height_squared = height_m * height_m
    if height_squared == 0:
        return 0

    bmi = weight / height_squared
    return bmi if math.isfinite(bmi) else 0


def classify_bmi(bmi):
    for upper, category, color in BMI_CLASSIFICATIONS:
        if upper is None or bmi < upper:
            return {'category': category, 'color': color}


def calculate_fat_mass(weight, body_fat_percentage):
    return weight * (body_fat_percentage / 100)


def calculate_lean_body_mass(weight, fat_mass):
    return weight - fat_mass


def estimate_maintenance_calories(weight, height, age, activity_multiplier=DEFAULT_ACTIVITY_MULTIPLIER):
    """
    Maintenance calories from the Mifflin-St Jeor equation for women:
    BMR = 10 * weight + 6.25 * height - 5 * age - 161, times the activity multiplier.
    """
    if weight <= 0 or height <= 0 or age <= 0:
        return 0

    bmr = 10 * weight + 6.25 * height - 5 * age - 161
    calories = bmr * activity_multiplier
    if not math.isfinite(calories):
        return 0
    return round_half_up(calories)


def calculate_fat_loss_calories(maintenance_calories, deficit=500):
    return max(MIN_CALORIES, maintenance_calories - deficit)


def calculate_composition(age, height, weight, neck, waist, hip,
                          activity_multiplier=DEFAULT_ACTIVITY_MULTIPLIER):
    """Run the full formula set for one set of measurements."""
    body_fat_percentage = calculate_body_fat_percentage(waist, hip, neck, height)
    bmi = calculate_bmi(weight, height)
    fat_mass = calculate_fat_mass(weight, body_fat_percentage)
    maintenance_calories = estimate_maintenance_calories(weight, height, age, activity_multiplier)

    result = {
        'body_fat_percentage': body_fat_percentage,
        'bmi': bmi,
        'bmi_classification': classify_bmi(bmi),
        'fat_mass': fat_mass,
        'lean_body_mass': calculate_lean_body_mass(weight, fat_mass),
        'maintenance_calories': maintenance_calories,
    }
    for deficit in FAT_LOSS_DEFICITS:
        result[f'fat_loss_calories_{deficit}'] = calculate_fat_loss_calories(maintenance_calories, deficit)

    return result
