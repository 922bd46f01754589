"""
Seed a demo organization with an admin, an employee, a few clients, events,
inventory and revenue records
"""
import sys
from datetime import date, timedelta

from app.database import SessionLocal
from app.models.organization import Organization
from app.models.user import User
from app.models.client import Client
from app.models.event import Event, EventGuest, EventStatus, GuestType
from app.models.inventory_item import InventoryItem
from app.models.menu_item import MenuItem
from app.models.revenue_record import RevenueRecord
from app.services.auth_service import create_user
from app.services.permission_service import is_seeded, seed_defaults

ORG_NAME = "Demo Catering Co"


def seed():
    db = SessionLocal()

    try:
        org = db.query(Organization).filter(Organization.name == ORG_NAME).first()
        if org:
            print(f"ℹ️  Organization already exists: {org.name} (ID: {org.id})")
            return

        org = Organization(name=ORG_NAME)
        db.add(org)
        db.commit()
        print(f"✅ Created organization: {org.name} (ID: {org.id})")

        for email, name, role in (
            ("admin@demo.com", "Demo Admin", "admin"),
            ("chef@demo.com", "Demo Chef", "employee"),
        ):
            if db.query(User).filter(User.email == email).first():
                print(f"ℹ️  User already exists: {email}")
                continue
            create_user(db, email, "demo1234", name, org.id, role=role)
            print(f"✅ Created {role}: {email} / demo1234")

        if not is_seeded(db, org.id):
            seed_defaults(db, org.id)

        johnson = Client(organization_id=org.id, name="Johnson Wedding", email="johnson@example.com")
        techcorp = Client(organization_id=org.id, name="TechCorp", email="events@techcorp.example")
        db.add_all([johnson, techcorp])
        db.flush()

        today = date.today()
        wedding = Event(
            organization_id=org.id,
            client_id=johnson.id,
            title="Johnson Wedding Reception",
            client_name=johnson.name,
            event_date=today + timedelta(days=30),
            address="12 Lakeside Dr",
            adult_count=10,
            child_count=2,
            number_of_guests=12,
            selected_upcharges=["Filet Mignon", "Chicken"],
            status=EventStatus.CONFIRMED,
            total_revenue=892.8,
        )
        wedding.guests.append(EventGuest(name="Alex Johnson", guest_type=GuestType.ADULT, proteins=["Filet Mignon"]))
        wedding.guests.append(EventGuest(name="Sam Johnson", guest_type=GuestType.CHILD, proteins=["Chicken"]))
        db.add(wedding)

        db.add_all([
            MenuItem(organization_id=org.id, name="Hibachi Chicken", category="Proteins", base_price_per_guest=12.0, is_gluten_free=True),
            MenuItem(organization_id=org.id, name="Vegetable Fried Rice", category="Sides", base_price_per_guest=4.0, is_vegetarian=True),
            InventoryItem(organization_id=org.id, name="Chicken Thigh", category="Protein", unit_type="lb",
                          cost_per_unit=3.5, current_quantity=40, minimum_stock=20, expiry_date=today + timedelta(days=5)),
            InventoryItem(organization_id=org.id, name="Jasmine Rice", category="Dry Goods", unit_type="lb",
                          cost_per_unit=1.2, current_quantity=8, minimum_stock=25),
        ])

        db.add_all([
            RevenueRecord(organization_id=org.id, client_id=johnson.id, revenue_date=today - timedelta(days=40),
                          gross_revenue=1000.0, food_costs=300.0, labor_costs=200.0, other_expenses=100.0,
                          net_profit=400.0, tax_amount=80.0, payment_method="card"),
            RevenueRecord(organization_id=org.id, client_id=techcorp.id, revenue_date=today - timedelta(days=10),
                          gross_revenue=500.0, food_costs=150.0, labor_costs=100.0, other_expenses=50.0,
                          net_profit=200.0, tax_amount=40.0, payment_method="cash"),
        ])

        db.commit()
        print("✅ Demo data seeded")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding demo data: {str(e)}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
