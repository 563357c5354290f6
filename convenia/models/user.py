"""
User model for the Convenia application
"""

from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from convenia.models.database import db, Timestamp

ADMIN_ROLE = 'admin'
TEACHER_ROLE = 'teacher'
# Older accounts carry the French role names
LEGACY_TEACHER_ROLES = ('enseignant', 'enseignant chercheur')
TEACHER_ROLES = (TEACHER_ROLE,) + LEGACY_TEACHER_ROLES
USER_ROLES = (ADMIN_ROLE,) + TEACHER_ROLES


class User(db.Model):
    """Account allowed to log in: a teacher/researcher or an admin"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(100), nullable=False, default=TEACHER_ROLE, index=True)
    department = db.Column(db.String(100), nullable=True)
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(Timestamp, default=datetime.utcnow)
    updated_at = db.Column(Timestamp, default=datetime.utcnow, onupdate=datetime.utcnow)

    def set_password(self, password):
        """Set password hash"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check password"""
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == ADMIN_ROLE

    def to_dict(self):
        """Convert to dictionary, without the password hash"""
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'department': self.department,
            'active': self.active,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
