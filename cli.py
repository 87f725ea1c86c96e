"""
CLI Commands - Account creation and portfolio import/export

Usage:
    flask --app app:create_app create-user alice --password s3cret! --name "Alice" --title "Engineer"
    flask --app app:create_app import-portfolio portfolio.json
    flask --app app:create_app export-portfolio --username alice > portfolio.json
"""

import json

import click
from flask import current_app
from flask.cli import with_appcontext
from pydantic import ValidationError

from schemas import RegisterRequest
from storage import DuplicateError, get_storage
from utils.auth import register_account
from utils.data import export_portfolio, import_portfolio
from utils.helpers import format_validation_errors


def _warn_if_ephemeral():
    if get_storage().name == 'memory':
        click.echo('Warning: STORAGE_BACKEND is "memory"; changes are lost when this command exits.', err=True)


def _fail_validation(exc):
    for error in format_validation_errors(exc):
        click.echo(f"  {error['field']}: {error['message']}", err=True)
    raise click.ClickException('Validation failed')


@click.command('create-user')
@with_appcontext
@click.argument('username')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.option('--name', required=True)
@click.option('--title', required=True)
def create_user_command(username, password, name, title):
    """Create a user account"""
    _warn_if_ephemeral()
    try:
        payload = RegisterRequest(username=username, password=password, name=name, title=title)
        user = register_account(payload)
    except ValidationError as e:
        _fail_validation(e)
    except DuplicateError:
        raise click.ClickException(f'Username {username} already exists')
    click.echo(f"Created user {user['username']} with id {user['id']}")


@click.command('import-portfolio')
@with_appcontext
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--username', default=None, help='Import into this account instead of the one in the file')
def import_portfolio_command(path, username):
    """Import a portfolio JSON export"""
    _warn_if_ephemeral()
    with open(path, 'r', encoding='utf-8') as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f'Invalid JSON in {path}: {e}')

    try:
        result = import_portfolio(payload, username=username)
    except ValidationError as e:
        _fail_validation(e)
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo(
        f"Imported portfolio for {result['user']['username']}: "
        f"{result['projects']} projects, {result['skills']} skills"
    )


@click.command('export-portfolio')
@with_appcontext
@click.option('--username', default=None, help='Defaults to the portfolio owner')
def export_portfolio_command(username):
    """Print a portfolio as JSON"""
    storage = get_storage()
    if username:
        user = storage.get_user_by_username(username)
    else:
        user = storage.get_user(current_app.config.get('PORTFOLIO_OWNER_ID', 1))
    if not user:
        raise click.ClickException('User not found')
    click.echo(json.dumps(export_portfolio(user['id']), ensure_ascii=False, indent=2))


def register_commands(app):
    app.cli.add_command(create_user_command)
    app.cli.add_command(import_portfolio_command)
    app.cli.add_command(export_portfolio_command)


__all__ = ['register_commands']
