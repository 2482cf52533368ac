import math

import pytest

from fither.calculations import (
    MIN_CALORIES,
    calculate_bmi,
    calculate_body_fat_percentage,
    calculate_composition,
    calculate_fat_loss_calories,
    calculate_fat_mass,
    calculate_lean_body_mass,
    classify_bmi,
    estimate_maintenance_calories,
    round_half_up,
)


def navy_body_fat(waist, hip, neck, height):
    return 495 / (1.29579 - 0.35004 * math.log10(waist + hip - neck) + 0.22100 * math.log10(height)) - 450


def test_body_fat_percentage_matches_navy_formula():
    body_fat = calculate_body_fat_percentage(75, 95, 32, 165)
    assert body_fat == pytest.approx(navy_body_fat(75, 95, 32, 165))
    assert body_fat == pytest.approx(27.43, abs=0.01)


@pytest.mark.parametrize('waist, hip, neck, height', [
    (0, 95, 32, 165),
    (75, 0, 32, 165),
    (75, 95, 0, 165),
    (75, 95, 32, 0),
    (-75, 95, 32, 165),
])
def test_body_fat_percentage_is_zero_for_missing_input(waist, hip, neck, height):
    assert calculate_body_fat_percentage(waist, hip, neck, height) == 0


def test_body_fat_percentage_is_zero_when_neck_exceeds_waist_and_hip():
    # waist + hip - neck <= 0 has no logarithm
    assert calculate_body_fat_percentage(10, 10, 25, 165) == 0
    assert calculate_body_fat_percentage(10, 10, 20, 165) == 0


@pytest.mark.parametrize('waist, hip, neck, height', [
    (75, 95, 32, 165),
    (40, 40, 79, 165),       # tiny log argument
    (300, 300, 10, 120),     # huge circumference
    (60, 80, 59, 250),
    (1e6, 1e6, 1, 1),
    (1, 1, 1, 1e6),
    (200, 200, 1, 50),
])
def test_body_fat_percentage_is_clamped(waist, hip, neck, height):
    assert 0 <= calculate_body_fat_percentage(waist, hip, neck, height) <= 100


def test_body_fat_percentage_clamps_to_bounds():
    assert calculate_body_fat_percentage(300, 300, 10, 120) == 100
    assert calculate_body_fat_percentage(40, 40, 79, 165) == 0


def test_bmi():
    assert calculate_bmi(65, 165) == pytest.approx(23.875, abs=1e-3)
    assert calculate_bmi(0, 165) == 0
    assert calculate_bmi(65, 0) == 0
    assert calculate_bmi(-1, 165) == 0


@pytest.mark.parametrize('bmi, category', [
    (0, 'underweight'),
    (18.49, 'underweight'),
    (18.5, 'normal'),
    (24.99, 'normal'),
    (25.0, 'overweight'),
    (29.99, 'overweight'),
    (30.0, 'obese'),
    (45, 'obese'),
])
def test_bmi_classification_boundaries(bmi, category):
    assert classify_bmi(bmi)['category'] == category


def test_bmi_classification_colors():
    assert classify_bmi(17)['color'] == 'blue'
    assert classify_bmi(22)['color'] == 'green'
    assert classify_bmi(27)['color'] == 'yellow'
    assert classify_bmi(35)['color'] == 'red'


@pytest.mark.parametrize('weight', [40, 65, 82.3, 150])
@pytest.mark.parametrize('body_fat', [0, 12.5, 27.43, 100])
def test_fat_and_lean_mass_add_up_to_weight(weight, body_fat):
    fat_mass = calculate_fat_mass(weight, body_fat)
    lean_mass = calculate_lean_body_mass(weight, fat_mass)
    assert 0 <= fat_mass <= weight
    assert fat_mass + lean_mass == pytest.approx(weight)


def test_maintenance_calories():
    # BMR = 650 + 1031.25 - 150 - 161 = 1370.25
    assert estimate_maintenance_calories(65, 165, 30, 1.375) == 1884
    assert estimate_maintenance_calories(65, 165, 30, 1.2) == round_half_up(1370.25 * 1.2)
    assert estimate_maintenance_calories(65, 165, 30) == 1884


@pytest.mark.parametrize('weight, height, age', [
    (0, 165, 30),
    (65, 0, 30),
    (65, 165, 0),
    (65, 165, -1),
])
def test_maintenance_calories_zero_for_missing_input(weight, height, age):
    assert estimate_maintenance_calories(weight, height, age, 1.375) == 0


def test_round_half_up():
    assert round_half_up(1883.5) == 1884
    assert round_half_up(1884.5) == 1885
    assert round_half_up(1883.49) == 1883


def test_fat_loss_calories():
    assert calculate_fat_loss_calories(1884, 300) == 1584
    assert calculate_fat_loss_calories(1884, 500) == 1384
    assert calculate_fat_loss_calories(1884) == 1384


@pytest.mark.parametrize('maintenance', [0, 1000, 1200, 1500, 1700, 2500])
@pytest.mark.parametrize('deficit', [0, 300, 500, 5000])
def test_fat_loss_calories_never_below_floor(maintenance, deficit):
    assert calculate_fat_loss_calories(maintenance, deficit) >= MIN_CALORIES


def test_composition_end_to_end():
    result = calculate_composition(age=30, height=165, weight=65, neck=32, waist=75, hip=95)

    assert result['bmi'] == pytest.approx(23.875, abs=1e-3)
    assert result['bmi_classification'] == {'category': 'normal', 'color': 'green'}
    assert result['body_fat_percentage'] == pytest.approx(navy_body_fat(75, 95, 32, 165))
    assert result['fat_mass'] == pytest.approx(65 * result['body_fat_percentage'] / 100)
    assert result['lean_body_mass'] == pytest.approx(65 - result['fat_mass'])
    assert result['maintenance_calories'] == 1884
    assert result['fat_loss_calories_300'] == 1584
    assert result['fat_loss_calories_500'] == 1384


def test_composition_with_empty_form():
    result = calculate_composition(age=0, height=0, weight=0, neck=0, waist=0, hip=0)

    assert result['body_fat_percentage'] == 0
    assert result['bmi'] == 0
    assert result['bmi_classification']['category'] == 'underweight'
    assert result['maintenance_calories'] == 0
    assert result['fat_loss_calories_300'] == MIN_CALORIES
    assert result['fat_loss_calories_500'] == MIN_CALORIES


def test_composition_is_repeatable():
    first = calculate_composition(30, 165, 65, 32, 75, 95, 1.55)
    second = calculate_composition(30, 165, 65, 32, 75, 95, 1.55)
    assert first == second


EXTREMES = [1e-300, 1e-200, 1e-5, 1e5, 1e200, 1e308]


@pytest.mark.parametrize('height', EXTREMES)
@pytest.mark.parametrize('weight', EXTREMES)
def test_bmi_extreme_inputs(weight, height):
    bmi = calculate_bmi(weight, height)
    assert math.isfinite(bmi)
    assert bmi >= 0


def test_bmi_tiny_height_degrades_to_zero():
    assert calculate_bmi(65, 1e-200) == 0
    assert calculate_bmi(1e308, 1) == 0


@pytest.mark.parametrize('value', EXTREMES)
def test_maintenance_calories_extreme_inputs(value):
    for args in [(value, 165, 30, 1.375), (65, value, 30, 1.375), (65, 165, value, 1.375),
                 (65, 165, 30, value), (value, value, value, value)]:
        calories = estimate_maintenance_calories(*args)
        assert isinstance(calories, int)


def test_maintenance_calories_overflow_degrades_to_zero():
    assert estimate_maintenance_calories(1e308, 165, 30, 1.375) == 0
    assert estimate_maintenance_calories(65, 165, 30, 1e308) == 0


@pytest.mark.parametrize('weight', EXTREMES)
def test_fat_and_lean_mass_extreme_weight(weight):
    fat_mass = calculate_fat_mass(weight, 100)
    assert math.isfinite(fat_mass)
    assert calculate_lean_body_mass(weight, fat_mass) >= 0


@pytest.mark.parametrize('value', EXTREMES)
def test_body_fat_and_fat_loss_extreme_inputs(value):
    assert 0 <= calculate_body_fat_percentage(value, value, value, value) <= 100
    assert 0 <= calculate_body_fat_percentage(value, value, 1, 165) <= 100
    assert calculate_fat_loss_calories(value, value) >= MIN_CALORIES


@pytest.mark.parametrize('value', EXTREMES)
def test_composition_extreme_inputs(value):
    result = calculate_composition(value, value, value, value, value, value, value)

    assert 0 <= result['body_fat_percentage'] <= 100
    assert math.isfinite(result['bmi'])
    assert math.isfinite(result['fat_mass'])
    assert math.isfinite(result['lean_body_mass'])
    assert result['fat_loss_calories_500'] >= MIN_CALORIES
