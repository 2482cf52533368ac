from fither.app import db
from datetime import date


class Measurement(db.Model):
    __tablename__ = 'measurements'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    date = db.Column(db.Date, nullable=False, default=date.today)

    # Inputs
    age = db.Column(db.Float, nullable=False)
    height = db.Column(db.Float, nullable=False)  # in cm
    weight = db.Column(db.Float, nullable=False)  # in kg
    neck = db.Column(db.Float, nullable=False)  # in cm
    waist = db.Column(db.Float, nullable=False)  # in cm
    hip = db.Column(db.Float, nullable=False)  # in cm
    activity_multiplier = db.Column(db.Float, nullable=False)

    # Results
    body_fat_percentage = db.Column(db.Float, nullable=False)
    bmi = db.Column(db.Float, nullable=False)
    bmi_category = db.Column(db.String(20), nullable=False)
    fat_mass = db.Column(db.Float, nullable=False)  # in kg
    lean_body_mass = db.Column(db.Float, nullable=False)  # in kg
    maintenance_calories = db.Column(db.Integer, nullable=False)
    fat_loss_calories_300 = db.Column(db.Integer, nullable=False)
    fat_loss_calories_500 = db.Column(db.Integer, nullable=False)

    @classmethod
    def from_composition(cls, user_id, measurements, composition, activity_multiplier, measured_on=None):
        return cls(
            user_id=user_id,
            date=measured_on or date.today(),
            activity_multiplier=activity_multiplier,
            bmi_category=composition['bmi_classification']['category'],
            body_fat_percentage=composition['body_fat_percentage'],
            bmi=composition['bmi'],
            fat_mass=composition['fat_mass'],
            lean_body_mass=composition['lean_body_mass'],
            maintenance_calories=composition['maintenance_calories'],
            fat_loss_calories_300=composition['fat_loss_calories_300'],
            fat_loss_calories_500=composition['fat_loss_calories_500'],
            **measurements
        )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'date': self.date.strftime('%Y-%m-%d'),
            'age': self.age,
            'height': self.height,
            'weight': self.weight,
            'neck': self.neck,
            'waist': self.waist,
            'hip': self.hip,
            'activity_multiplier': self.activity_multiplier,
            'body_fat_percentage': self.body_fat_percentage,
            'bmi': self.bmi,
            'bmi_category': self.bmi_category,
            'fat_mass': self.fat_mass,
            'lean_body_mass': self.lean_body_mass,
            'maintenance_calories': self.maintenance_calories,
            'fat_loss_calories_300': self.fat_loss_calories_300,
            'fat_loss_calories_500': self.fat_loss_calories_500
        }
