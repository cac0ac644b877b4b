"""
Resource tracker package.

A small local catalog of learning/reference resources (articles,
books, courses, videos...). Records live in an in-memory
``ResourceStore`` that writes the whole collection to a key-value
storage after every mutation, and display views are derived on
demand by ``query_resources``. A FastAPI application in ``main``
exposes the catalog to a local front-end.
"""

__version__ = "1.0.0"
