import logging

from sqlalchemy.orm import Session

from shared.core.database import Database
from shared.core.logging_config import configure_logging
from shared.models.users import UserRole, Users
from .app.models import Tag, TagCategory

logger = logging.getLogger(__name__)

SYSTEM_EMAIL = "system@atlas.local"

TAG_CATEGORIES = {
    "Condition": {
        "description": "Condition status of resources",
        "tags": [
            ("Excellent", "#4caf50", "In excellent condition"),
            ("Good", "#2196f3", "In good condition"),
            ("Fair", "#ff9800", "In fair condition"),
            ("Poor", "#f44336", "In poor condition"),
            ("Broken", "#d32f2f", "Broken or non-functional"),
        ],
    },
    "Status": {
        "description": "Availability status of resources",
        "tags": [
            ("Available", "#4caf50", "Available for use"),
            ("Checked Out", "#757575", "Currently checked out"),
            ("In Maintenance", "#ff9800", "Under maintenance"),
            ("Reserved", "#2196f3", "Reserved for future use"),
        ],
    },
    "Location Type": {
        "description": "Type classification for locations",
        "tags": [
            ("Area", "#9c27b0", "Large area or section"),
            ("Zone", "#673ab7", "Zone within an area"),
            ("Cabinet", "#3f51b5", "Storage cabinet"),
            ("Drawer", "#2196f3", "Drawer within furniture"),
            ("Bin", "#03a9f4", "Storage bin or container"),
        ],
    },
}


def get_or_create_system_user(db: Session) -> Users:
    user = db.query(Users).filter(Users.email == SYSTEM_EMAIL).first()
    if not user:
        user = Users(email=SYSTEM_EMAIL, name="System", role=UserRole.admin)
        db.add(user)
        db.flush()
        print("Created system user")
    return user


def seed_tags(db: Session, created_by_id: str) -> dict:
    """Create the default categories and tags; existing rows are left alone.

    Returns ``{category name: {tag name: Tag}}``.
    """
    seeded = {}
    for category_name, category_data in TAG_CATEGORIES.items():
        category = db.query(TagCategory).filter(TagCategory.name == category_name).first()
        if not category:
            category = TagCategory(
                name=category_name,
                description=category_data["description"],
                created_by_id=created_by_id,
            )
            db.add(category)
            db.flush()
            print(f"Created tag category: {category_name}")

        seeded[category_name] = {}
        for name, color, description in category_data["tags"]:
            tag = db.query(Tag).filter(Tag.category_id == category.id, Tag.name == name).first()
            if not tag:
                tag = Tag(
                    category_id=category.id,
                    name=name,
                    color=color,
                    description=description,
                    created_by_id=created_by_id,
                )
                db.add(tag)
                db.flush()
            seeded[category_name][name] = tag
        print(f"Seeded {len(category_data['tags'])} {category_name} tags")
    return seeded


def run(database: Database = None):
    database = database or Database()
    database.create_all()
    db = database.session()
    try:
        system_user = get_or_create_system_user(db)
        seed_tags(db, system_user.id)
        db.commit()
        print("\nTag seed completed successfully!")
    except Exception:
        db.rollback()
        logger.exception("Tag seed failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    run()
