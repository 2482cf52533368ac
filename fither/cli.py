import logging

import click
from flask import current_app

from fither.app import db
from fither.models.user import User, ROLE_ADMIN

logger = logging.getLogger(__name__)


def create_admin(email, password, name='Admin'):
    """
    Create an active admin account unless one already exists for email.
    Returns (user, created).
    """
    user = User.query.filter_by(email=email).first()
    if user:
        return user, False

    user = User(
        email=email,
        password=password,
        name=name,
        role=ROLE_ADMIN,
        is_active=True
    )
    db.session.add(user)
    db.session.commit()
    logger.info('Admin account %s created', email)
    return user, True


def register_commands(app):
    @app.cli.command('create-admin')
    @click.option('--email', default=None, help='Admin email (defaults to ADMIN_EMAIL).')
    @click.option('--password', default=None, help='Admin password (defaults to ADMIN_PASSWORD).')
    @click.option('--name', default='Admin', show_default=True)
    def create_admin_command(email, password, name):
        """Create the bootstrap admin account."""
        email = email or current_app.config['ADMIN_EMAIL']
        password = password or current_app.config['ADMIN_PASSWORD']
        if not password:
            raise click.UsageError('Provide --password or set ADMIN_PASSWORD.')

        db.create_all()
        user, created = create_admin(email, password, name)
        if created:
            click.echo(f'Admin user created: {user.email}')
        else:
            click.echo(f'Admin user already exists: {user.email}')
