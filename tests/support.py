"""Shared fixtures: a throwaway SQLite database per test case."""

import os
import sys
import tempfile

# Allow running from repo root without installing the package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sqlalchemy.orm import sessionmaker

from ubepari.data.database import create_tables, make_engine
from ubepari.data.models import Product


class TempDatabase:
    def __init__(self):
        fd, self.path = tempfile.mkstemp(suffix='.db')
        os.close(fd)
        self.engine = make_engine(f"sqlite:///{self.path}")
        create_tables(bind=self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self):
        return self.SessionLocal()

    def get_db(self):
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def add_product(self, **fields):
        db = self.SessionLocal()
        try:
            product = Product(**fields)
            db.add(product)
            db.commit()
            return product.id
        finally:
            db.close()

    def stock_of(self, product_id):
        db = self.SessionLocal()
        try:
            return db.get(Product, product_id).stock
        finally:
            db.close()

    def close(self):
        self.engine.dispose()
        if os.path.exists(self.path):
            os.remove(self.path)
