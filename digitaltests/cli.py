"""
Flask CLI commands. Admin accounts can only be created from here.
"""
import click
from flask import Flask

from digitaltests import db
from digitaltests.auth.models import User
from digitaltests.auth.utils import USERNAME_REGEX, hash_password, is_valid_email, normalize_email
from digitaltests.common.context import ROLE_ADMIN
from digitaltests.config import config


def register_commands(app: Flask) -> None:

    @app.cli.command("create-admin")
    @click.option("--name", required=True, help="Display name")
    @click.option("--email", default=None, help="Admin email")
    @click.option("--username", default=None, help="Admin username")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_admin(name, email, username, password):
        """Create an active Admin account."""
        email = normalize_email(email)
        if not email and not username:
            raise click.UsageError("Either --email or --username is required.")
        if email and not is_valid_email(email):
            raise click.BadParameter("Invalid email address.", param_hint="--email")
        if username and not USERNAME_REGEX.match(username):
            raise click.BadParameter("Letters, numbers and underscores only.", param_hint="--username")
        if len(password) < config.MIN_PASSWORD_LENGTH:
            raise click.BadParameter(
                f"Password must be at least {config.MIN_PASSWORD_LENGTH} characters.", param_hint="--password"
            )

        if email and User.query.filter_by(email=email).first():
            raise click.ClickException(f"A user with email {email} already exists.")
        if username and User.query.filter_by(username=username).first():
            raise click.ClickException(f"A user with username {username} already exists.")

        admin = User(
            name=name.strip(),
            email=email,
            username=username,
            password_hash=hash_password(password),
            role=ROLE_ADMIN,
            active=True,
        )
        db.session.add(admin)
        db.session.commit()
        click.echo(f"Admin {admin.id} created.")
