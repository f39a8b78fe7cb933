"""CLI tools for running and administering the survey CRM."""

import random
from datetime import date, timedelta

import click

from survey_crm.core.config import settings
from survey_crm.core.logging_setup import configure_logging, safe_database_url
from survey_crm.db.enums import HeatingSystem, PropertyType
from survey_crm.db.session import create_db_engine, create_session_factory, init_db
from survey_crm.schemas.survey import SurveyCreate, SurveyDetailCreate
from survey_crm.services import survey_service

DEMO_CUSTOMERS = [
    "Alice Morgan", "Ben Hughes", "Chloe Patel", "Dan Roberts", "Ella Evans",
    "Finn Walsh", "Grace Lewis", "Harry Price", "Isla Jenkins", "Jack Turner",
]
DEMO_STREETS = [
    "Station Road", "Church Lane", "Victoria Street", "Park Avenue", "Mill Lane",
    "High Street", "Queens Road", "The Crescent",
]
DEMO_ROOMS = [
    ("Loft", "loft", "100mm mineral wool", "Top up to 270mm"),
    ("Living room", "living", "Unfilled cavity walls", "Cavity wall insulation"),
    ("Kitchen", "kitchen", "Solid wall, none", "Internal wall insulation"),
    ("Ground floor", "floor", "Suspended timber, none", "Underfloor insulation"),
]
DEMO_SURVEYORS = ["Sam Carter", "Priya Shah", "Tom Davies"]


@click.group()
def cli():
    """Survey CRM CLI tools."""
    pass


@cli.command()
@click.option("--host", default=None, help="Bind address (default: HOST setting)")
@click.option("--port", default=None, type=int, help="Port (default: PORT setting)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server and dashboard."""
    import uvicorn

    host = host or settings.HOST
    port = port or settings.PORT
    click.echo(f"Survey CRM server running on http://{host}:{port}")
    # nosec B104 - binding to all interfaces is intended for LAN access.
    uvicorn.run("survey_crm.main:app", host=host, port=port, reload=reload)


@cli.command("init-db")
def init_db_command():
    """Create the database tables if they don't exist."""
    configure_logging(settings)
    engine = create_db_engine(settings.database_url)
    try:
        init_db(engine)
    finally:
        engine.dispose()
    click.echo(f"✓ Database ready: {safe_database_url(settings.database_url)}")


@cli.command()
@click.option("--count", default=10, show_default=True, help="Number of surveys to create")
def seed(count: int):
    """
    Insert demo surveys, each with one room detail.

    Example:
        survey-crm seed --count 25
    """
    configure_logging(settings)
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    db = create_session_factory(engine)()
    try:
        for _ in range(count):
            survey = survey_service.create_survey(
                db,
                SurveyCreate(
                    customer_name=random.choice(DEMO_CUSTOMERS),
                    customer_email=None,
                    property_address=f"{random.randint(1, 120)} {random.choice(DEMO_STREETS)}",
                    property_type=random.choice(list(PropertyType)),
                    current_heating_system=random.choice(list(HeatingSystem)),
                    survey_date=date.today() + timedelta(days=random.randint(0, 30)),
                    surveyor_name=random.choice(DEMO_SURVEYORS),
                ),
            )
            room_name, room_type, current, recommended = random.choice(DEMO_ROOMS)
            survey_service.add_survey_detail(
                db,
                survey.id,
                SurveyDetailCreate(
                    room_name=room_name,
                    room_type=room_type,
                    current_insulation=current,
                    recommended_improvements=recommended,
                    estimated_cost=float(random.randrange(300, 6000, 50)),
                    potential_savings=float(random.randrange(50, 600, 10)),
                ),
            )
        click.echo(f"✓ Created {count} demo surveys")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
        raise SystemExit(1)
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    cli()
