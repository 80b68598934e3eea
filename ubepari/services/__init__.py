"""Store operations over a SQLAlchemy session.

Each function takes the request's ``Session`` and commits its own unit of
work; nothing here spans more than one store operation in a transaction.
"""
