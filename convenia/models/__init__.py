"""
Database models initialization
"""

from convenia.models.database import db, init_db, check_connection
from convenia.models.user import User
from convenia.models.convention import ConventionRequest, RequestDocument

# Export all models
__all__ = ['db', 'init_db', 'check_connection', 'User', 'ConventionRequest', 'RequestDocument']
