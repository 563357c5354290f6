"""
Flask CLI commands for database setup and account bootstrap
"""

import click
from flask import Flask, current_app
from convenia.models import init_db, check_connection
from convenia.models.user import TEACHER_ROLE, USER_ROLES
from convenia.services import UserService
from convenia.utils import ConveniaError


def register_commands(app: Flask) -> None:

    @app.cli.command('init-db')
    def init_db_command():
        """Create tables and the bootstrap admin (ADMIN_EMAIL/ADMIN_PASSWORD)"""
        init_db(current_app)
        click.echo("Database initialized")

    @app.cli.command('check-db')
    def check_db_command():
        """Run a trivial query against the configured database"""
        if check_connection():
            click.echo("Database connection available")
        else:
            raise click.ClickException("Database connection failed")

    @app.cli.command('create-user')
    @click.argument('email')
    @click.argument('name')
    @click.option('--role', type=click.Choice(USER_ROLES), default=TEACHER_ROLE)
    @click.option('--department', default=None)
    @click.password_option()
    def create_user_command(email, name, role, department, password):
        """Add an account"""
        try:
            user = UserService.create_user(email, password, name, role, department)
        except ConveniaError as e:
            raise click.ClickException(str(e))
        click.echo(f"Created {user.role} {user.email} (id={user.id})")
