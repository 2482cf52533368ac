from fither.app import db
from datetime import datetime
import secrets


def generate_session_id():
    return f"session-{secrets.token_hex(16)}"


class UserSession(db.Model):
    """One login of one user. A JWT is only honoured while its session is active."""
    __tablename__ = 'user_sessions'

    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.String(64), unique=True, nullable=False, default=generate_session_id)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    login_time = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    last_activity = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    user_agent = db.Column(db.String(255), default='Unknown')
    ip_address = db.Column(db.String(64), default='Unknown')
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    def to_dict(self, current_session_id=None):
        return {
            'session_id': self.session_id,
            'user_id': self.user_id,
            'login_time': self.login_time.isoformat(),
            'last_activity': self.last_activity.isoformat(),
            'user_agent': self.user_agent,
            'ip_address': self.ip_address,
            'is_current': self.session_id == current_session_id
        }
