"""
Database initialization and connection utilities
"""

import logging
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text
from sqlalchemy.dialects import mysql

logger = logging.getLogger(__name__)

# Shared by every model module
db = SQLAlchemy()

# MySQL DATETIME drops fractional seconds unless fsp is given
Timestamp = db.DateTime().with_variant(mysql.DATETIME(fsp=6), 'mysql')


def init_db(app) -> None:
    """Create all tables and the bootstrap admin account, if configured"""
    from convenia.models.user import User

    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

        email = app.config.get('ADMIN_EMAIL')
        password = app.config.get('ADMIN_PASSWORD')
        if not email or not password:
            return

        email = email.strip().lower()
        if User.query.filter_by(email=email).first():
            return

        admin = User(
            email=email,
            name=app.config.get('ADMIN_NAME') or 'Administrator',
            role='admin',
            department='Administration',
            active=True,
        )
        admin.set_password(password)
        db.session.add(admin)
        db.session.commit()
        logger.info("Bootstrap admin %s created", email)


def check_connection() -> bool:
    """Run a trivial query against the configured database"""
    try:
        db.session.execute(text('SELECT 1'))
        return True
    except Exception as e:
        logger.error("Database connection error: %s", e)
        db.session.rollback()
        return False
