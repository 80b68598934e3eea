from .database import SessionLocal, create_tables
from .models import Product

SAMPLE_PRODUCTS = [
    {"name": "Dell Latitude 5420", "brand": "Dell", "price": 1250000, "cost_price": 1050000, "stock": 4,
     "caption": "Core i5 11th gen, 8GB RAM, 256GB SSD"},
    {"name": "HP EliteBook 840 G6", "brand": "HP", "price": 1100000, "cost_price": 920000, "stock": 3,
     "caption": "Core i5 8th gen, 8GB RAM, 512GB SSD"},
    {"name": "Lenovo ThinkPad T480", "brand": "Lenovo", "price": 950000, "cost_price": 780000, "stock": 0,
     "caption": "Core i7, 16GB RAM, 512GB SSD"},
    {"name": "MacBook Air M1", "brand": "Apple", "price": 2300000, "cost_price": 2000000, "stock": 1,
     "caption": "8GB RAM, 256GB SSD"},
]

def populate_products():
    """Seed the products table with a sample catalog."""
    # Ensure tables are created
    create_tables()

    db = SessionLocal()
    try:
        if db.query(Product).count() > 0:
            print("Products table is not empty. Skipping population.")
            return

        for row in SAMPLE_PRODUCTS:
            db.add(Product(**row))

        db.commit()
        print(f"Successfully populated the products table with {len(SAMPLE_PRODUCTS)} products.")
    except Exception as e:
        db.rollback()
        print(f"Error populating products table: {e}")
    finally:
        db.close()

if __name__ == "__main__":
    populate_products()
