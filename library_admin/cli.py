# library_admin/cli.py
"""
Flask CLI commands for seeding user types and bootstrapping administrators.
"""

import click
from flask import current_app
from library_admin.extensions import db
from library_admin.models import UserType
from library_admin.services import AdminService, PasswordPolicy

STANDARD_USER_TYPES = [
    ('staff_admin', 'Staff Admin'),
    ('staff', 'Staff'),
    ('faculty', 'Faculty'),
    ('student', 'Student'),
]


def seed_user_types():
    """Insert the standard user types that don't exist yet. Returns the keys added."""
    added = []
    for key, name in STANDARD_USER_TYPES:
        if UserType.find_by_key(key):
            continue
        db.session.add(UserType(key=key, name=name))
        added.append(key)
    db.session.commit()
    return added


def register_cli_commands(app):
    """Register CLI commands with the Flask app."""

    @app.cli.command('seed-user-types')
    def seed_user_types_command():
        """Seed the standard user types (staff_admin, staff, faculty, student)."""
        added = seed_user_types()
        for key in added:
            click.echo(f"Added user type: {key}")
        if not added:
            click.echo('All user types already exist, nothing to do.')
        else:
            click.echo('User types seeded successfully!')

    @app.cli.command('create-admin')
    @click.option('--library-id', prompt=True, help='1-10 digit library identifier.')
    @click.option('--first-name', prompt=True)
    @click.option('--last-name', prompt=True)
    @click.option('--middle-initial', default='', help='Optional single character.')
    @click.option('--sex', prompt=True, type=click.Choice(['m', 'f']))
    @click.option('--email', prompt=True)
    @click.option('--role-title', prompt=True)
    @click.password_option()
    def create_admin_command(library_id, first_name, last_name, middle_initial, sex, email, role_title, password):
        """Create a staff admin account (e.g. the first one, to log in with)."""
        if not (library_id.isdigit() and len(library_id) <= 10):
            click.echo('Error: library id must be between 1 and 10 digits.', err=True)
            raise SystemExit(1)

        problems = PasswordPolicy.from_config(current_app.config).violations(password)
        if problems:
            for problem in problems:
                click.echo(f"Error: {problem}", err=True)
            raise SystemExit(1)

        result = AdminService.create_admin({
            'library_id': library_id,
            'first_name': first_name,
            'middle_initial': middle_initial or None,
            'last_name': last_name,
            'sex': sex,
            'email': email.lower(),
            'role_title': role_title,
            'password': password,
        }, staff_admin_key=current_app.config.get('STAFF_ADMIN_TYPE_KEY', 'staff_admin'))

        if not result:
            if result.exception is not None:
                current_app.logger.error(f"create-admin failed: {result.exception}")
            click.echo(f"Error: {result.message}", err=True)
            raise SystemExit(1)

        click.echo(f"Created admin {result.value.full_name} (library id {result.value.library_id}).")
