"""
Flask CLI commands

- flask --app app init-db
  • Create all tables.
- flask --app app create-admin EMAIL PASSWORD [--name NAME]
  • Create an admin user, or promote and reactivate an existing one.
- flask --app app cleanup-tokens
  • Remove expired and revoked refresh tokens.
"""

import click
from flask.cli import with_appcontext
from .models import db, User
from .utils.auth_utils import create_user, hash_password, cleanup_expired_tokens
from .utils.validators import validate_email, validate_password_strength


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create database tables."""
    db.create_all()
    click.echo('Database tables created.')


@click.command('create-admin')
@click.argument('email')
@click.argument('password')
@click.option('--name', default=None, help='Display name for the admin.')
@with_appcontext
def create_admin_command(email, password, name):
    """Create or promote an admin user."""
    email_result = validate_email(email)
    if not email_result.is_valid:
        raise click.BadParameter(email_result.error_message, param_hint='EMAIL')
    password_result = validate_password_strength(password)
    if not password_result.is_valid:
        raise click.BadParameter(password_result.error_message, param_hint='PASSWORD')

    db.create_all()
    user = User.query.filter_by(email=email_result.sanitized_value).first()
    if user:
        user.role = 'admin'
        user.status = 'active'
        user.password_hash = hash_password(password)
        if name:
            user.name = name
        db.session.commit()
        click.echo(f'Promoted {user.email} to admin (user id {user.user_id}).')
    else:
        user = create_user(email_result.sanitized_value, password, name=name, role='admin')
        click.echo(f'Created admin {user.email} (user id {user.user_id}).')


@click.command('cleanup-tokens')
@with_appcontext
def cleanup_tokens_command():
    """Delete expired and revoked refresh tokens."""
    removed = cleanup_expired_tokens()
    click.echo(f'Removed {removed} refresh tokens.')


def register_commands(app):
    """Register CLI commands with the Flask app"""
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_admin_command)
    app.cli.add_command(cleanup_tokens_command)
