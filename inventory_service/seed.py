import logging
import random
import uuid

from faker import Faker
from sqlalchemy.orm import Session

from shared.core.database import Database
from shared.core.logging_config import configure_logging
from .app.crud.location_paths import join_path
from .app.models import (
    Location,
    ResourceCondition,
    ResourceInstance,
    ResourceInstanceTag,
    ResourceModel,
)
from .seed_tags import get_or_create_system_user, seed_tags

logger = logging.getLogger(__name__)

fake = Faker()

# (name, location type, description, children)
LOCATION_TREE = [
    ("Assembly", "Area", "Assembly area", [
        ("Bench A", "Zone", "Work bench A in Assembly area", [
            ("Drawer 1", "Drawer", "Drawer 1 in Bench A", []),
        ]),
    ]),
    ("Automotive", "Area", "Automotive area", [
        ("Toolbox A", "Zone", "Toolbox A in Automotive area", [
            ("Drawer 1", "Drawer", "Drawer 1 in Toolbox A", []),
        ]),
    ]),
]

RESOURCE_MODELS = [
    ("#2 Phillips Screwdriver", "Standard #2 Phillips head screwdriver"),
    ('3" Crescent Wrench', "3 inch adjustable crescent wrench"),
]

# (model name, location path)
RESOURCE_INSTANCES = [
    ("#2 Phillips Screwdriver", "/Assembly/Bench A/Drawer 1"),
    ("#2 Phillips Screwdriver", "/Automotive/Toolbox A/Drawer 1"),
    ('3" Crescent Wrench', "/Assembly/Bench A/Drawer 1"),
]


def add_location(db: Session, name, type_tag, description, parent, sort_order, created_by_id) -> Location:
    location_id = str(uuid.uuid4())
    location = Location(
        id=location_id,
        name=name,
        location_type_tag_id=type_tag.id,
        description=description,
        parent_id=parent.id if parent else None,
        path=join_path(parent.path if parent else None, name),
        path_ids=join_path(parent.path_ids if parent else None, location_id),
        sort_order=sort_order,
        created_by_id=created_by_id,
    )
    db.add(location)
    db.flush()
    print(f"Created location: {location.path}")
    return location


def seed_locations(db: Session, location_types: dict, created_by_id: str) -> dict:
    by_path = {}

    def walk(nodes, parent):
        for sort_order, (name, type_name, description, children) in enumerate(nodes):
            location = add_location(db, name, location_types[type_name], description,
                                    parent, sort_order, created_by_id)
            by_path[location.path] = location
            walk(children, location)

    walk(LOCATION_TREE, None)
    return by_path


def seed_data(database: Database = None):
    database = database or Database()
    database.create_all()
    db = database.session()
    try:
        system_user = get_or_create_system_user(db)
        tags = seed_tags(db, system_user.id)

        locations = seed_locations(db, tags["Location Type"], system_user.id)

        models = {}
        for name, description in RESOURCE_MODELS:
            model = ResourceModel(
                name=name,
                description=description,
                manufacturer=fake.company(),
                model_number=fake.bothify("??-####").upper(),
                created_by_id=system_user.id,
            )
            db.add(model)
            db.flush()
            models[name] = model
            print(f"Created resource model: {name}")

        default_tags = [tags["Condition"]["Good"], tags["Status"]["Available"]]
        for model_name, location_path in RESOURCE_INSTANCES:
            instance = ResourceInstance(
                model_id=models[model_name].id,
                location_id=locations[location_path].id,
                serial_number=fake.bothify("SN-########"),
                quantity=1,
                condition=ResourceCondition.good,
                notes=fake.sentence() if random.random() < 0.5 else None,
                is_checkout_enabled=True,
                is_available=True,
                created_by_id=system_user.id,
            )
            instance.tag_links = [ResourceInstanceTag(tag_id=tag.id) for tag in default_tags]
            db.add(instance)
            print(f"Created resource instance: {model_name} in {location_path}")

        db.commit()
        print("\nSeed completed successfully!")
        print(f"- {len(locations)} locations, {len(models)} resource models, "
              f"{len(RESOURCE_INSTANCES)} resource instances")
    except Exception:
        db.rollback()
        logger.exception("Seed failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    seed_data()
