"""
Flask CLI commands for database setup and order number inspection.

Commands:
- flask init-db: Create missing tables
- flask schema-flags: Show which optional order columns this database has
- flask next-order-number: Preview the number the next order would get
"""

import click
from flask import current_app
from weighbridge.database import create_all, get_engine, get_session
from weighbridge.services.schema_service import detect_optional_columns


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create every table that does not exist yet."""
        try:
            create_all(get_engine())
        except Exception as e:
            click.echo(click.style(f'Error creating tables: {e}', fg='red'))
            raise SystemExit(1)
        click.echo(click.style('Tables created.', fg='green'))

    @app.cli.command('schema-flags')
    def schema_flags_command():
        """Probe the orders table for payment_terms and order_type."""
        flags = detect_optional_columns(get_engine())
        for column, present in flags.to_dict().items():
            colour = 'green' if present else 'yellow'
            click.echo(f"{column}: " + click.style('yes' if present else 'no', fg=colour))

    @app.cli.command('next-order-number')
    def next_order_number_command():
        """Show the next order number without consuming it."""
        allocator = current_app.extensions['order_number_allocator']
        session = get_session()
        try:
            click.echo(allocator.next_code(session))
        finally:
            session.rollback()
        click.echo(f'(strategy: {allocator.strategy})')
