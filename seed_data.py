from app import create_app, db
from app.models import Customer

DEFAULT_CUSTOMERS = (
    ("Evil Rabbit", "evil@rabbit.com"),
    ("Delba de Oliveira", "delba@oliveira.com"),
    ("Lee Robinson", "lee@robinson.com"),
    ("Michael Novotny", "michael@novotny.com"),
    ("Amy Burns", "amy@burns.com"),
    ("Balazs Orban", "balazs@orban.com"),
)


def seed_customers(customers=DEFAULT_CUSTOMERS) -> int:
    """Insert any missing customers, matched by email. Return how many were added."""
    added = 0
    for name, email in customers:
        if Customer.query.filter_by(email=email).first() is not None:
            continue
        db.session.add(Customer(name=name, email=email))
        added += 1
    db.session.commit()
    return added


def seed_initial_data() -> None:
    """Seed the database with the default customers."""
    app = create_app([])
    with app.app_context():
        added = seed_customers()
        app.logger.info("Seeded %d customers.", added)


if __name__ == "__main__":
    seed_initial_data()
