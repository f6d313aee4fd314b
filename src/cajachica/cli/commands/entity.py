"""Entity management commands."""

import click

from cajachica.cli.context import get_db, get_user_id
from cajachica.cli.error_handling import handle_domain_error
from cajachica.domain.entities import ActivityType
from cajachica.domain.entity import EntityService
from cajachica.utils.resolvers import resolve_entity

ACTIVITY_CHOICES = click.Choice([activity.value for activity in ActivityType], case_sensitive=False)


@click.group()
def entity_group():
    """Manage entities (businesses and counterparties)."""
    pass


@entity_group.command("create")
@click.argument("name", metavar="ENTITY_NAME")
@click.option("--type", "activity_type", type=ACTIVITY_CHOICES, default="PERSONAL", show_default=True,
              help="Activity type")
@click.option("--description", help="Free-text description")
@click.pass_context
def create_entity(ctx, name: str, activity_type: str, description: str | None):
    """Create a new entity.

    Examples:
        cajachica entity create "Freelance" --type FREELANCE
        cajachica entity create "Kiosco" --type COMERCIO --description "Local de la esquina"
    """
    service = EntityService(get_db(ctx))
    try:
        entity_id = service.create_entity(get_user_id(ctx), name, activity_type, description=description)
        click.echo(f"Created entity '{name}' (ID: {entity_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@entity_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include inactive entities")
@click.option("--search", help="Filter by name or description")
@click.pass_context
def list_entities(ctx, show_all: bool, search: str | None):
    """List entities."""
    service = EntityService(get_db(ctx))
    entities = service.list_entities(get_user_id(ctx), active=None if show_all else True, search=search)
    if not entities:
        click.echo("No entities found.")
        return

    click.echo("\nEntities:")
    click.echo("-" * 70)
    for ent in entities:
        status = "" if ent.active else " (inactive)"
        click.echo(f"ID: {ent.id:3d} | {ent.name:25s} | {ent.activity_type.value:12s}{status}")


@entity_group.command("update")
@click.argument("entity", metavar="ENTITY")
@click.option("--name", help="New name")
@click.option("--type", "activity_type", type=ACTIVITY_CHOICES, help="New activity type")
@click.option("--description", help="New description")
@click.option("--active/--inactive", default=None, help="Activate or deactivate")
@click.pass_context
def update_entity(ctx, entity: str, name: str | None, activity_type: str | None, description: str | None,
                  active: bool | None):
    """Update an entity. ENTITY can be a name or ID.

    Examples:
        cajachica entity update "Kiosco" --inactive
    """
    service = EntityService(get_db(ctx))
    user_id = get_user_id(ctx)
    try:
        entity_id = resolve_entity(service, user_id, entity)
        updated = service.update_entity(
            user_id, entity_id, name=name, description=description, activity_type=activity_type, active=active
        )
        click.echo(f"Updated entity '{updated.name}' (ID: {updated.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@entity_group.command("delete")
@click.argument("entity", metavar="ENTITY")
@click.pass_context
def delete_entity(ctx, entity: str):
    """Delete an entity with no transactions. ENTITY can be a name or ID."""
    service = EntityService(get_db(ctx))
    user_id = get_user_id(ctx)
    try:
        entity_id = resolve_entity(service, user_id, entity)
        service.delete_entity(user_id, entity_id)
        click.echo(f"Deleted entity {entity_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register entity commands with main CLI."""
    cli.add_command(entity_group, name="entity")
