"""
Main application entry point
Runs the Convenia API with the development server
"""

import os
import sys

from convenia import create_app
from convenia.models import check_connection
from convenia.utils import log_info

app = create_app()


def main():
    """Main application entry point"""
    with app.app_context():
        if not check_connection():
            print("Database connection error. Check DB_HOST/DB_USER/DB_PASSWORD/DB_NAME "
                  "or DATABASE_URL, then run: flask --app main check-db")
            return False
        log_info("Database connection available")

    debug_mode = os.environ.get('FLASK_DEBUG', 'True').lower() in ['true', '1', 'on']
    port = int(os.environ.get('PORT', 5000))
    print(f"Starting Convenia API on http://localhost:{port}")

    app.run(
        host='0.0.0.0',
        port=port,
        debug=debug_mode
    )
    return True


if __name__ == '__main__':
    success = main()
    if not success:
        sys.exit(1)
