"""Flask CLI commands for bootstrapping the database and managing accounts.

    flask --app app init-db
    flask --app app create-user manager@example.com --role MANAGER --name "Mona Manager"
    flask --app app list-users
    flask --app app reset-password someone@example.com
"""
import click
from models import db
from models.rbac import Role
from models.user import User
from utils.auth_utils import hash_password


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("create-user")
    @click.argument("email")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--role", type=click.Choice([r.value for r in Role], case_sensitive=False),
                  default=Role.EMPLOYEE.value, show_default=True)
    @click.option("--name", default=None, help="Display name for the employee profile.")
    @click.option("--role-title", default=None)
    def create_user_command(email, password, role, name, role_title):
        """Create an account with any role."""
        from auth.routes import create_user

        if User.query.filter_by(email=email.strip().lower()).first():
            raise click.ClickException(f"User already exists: {email}")
        user = create_user(email, password, role=role, name=name, role_title=role_title)
        db.session.commit()
        click.echo(f"Created user {user.id} ({user.email}, {user.role})")

    @app.cli.command("list-users")
    def list_users():
        """Lists all users in the database."""
        users = User.query.order_by(User.id).all()
        if not users:
            click.echo("No users found in the database.")
            return

        click.echo(f"{'ID':<4} {'Email':<35} {'Role':<16} {'Name':<30}")
        click.echo("-" * 85)
        for user in users:
            click.echo(f"{user.id:<4} {user.email:<35} {user.role:<16} {user.display_name:<30}")

    @app.cli.command("reset-password")
    @click.argument("email")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def reset_password(email, password):
        """Resets the password for a given user email."""
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user:
            raise click.ClickException(f"User not found: {email}")
        user.password = hash_password(password)
        db.session.commit()
        click.echo(f"Password for {user.email} has been reset.")
