"""
Bookworm Backend - Entity Repositories
=======================================

One repository per collection, all built on CollectionRepository:

    users.py      register / login / list
    books.py      CRUD + search & genre filter
    genres.py     unique-name create, sorted list, update, delete
    tutorials.py  create, newest-first list, delete
    shelves.py    (userId, bookInfo) upsert
    reviews.py    forced-pending submit, approved-only list
"""

from bookworm.repositories.base import CollectionRepository
from bookworm.repositories.books import BookRepository
from bookworm.repositories.genres import GenreRepository
from bookworm.repositories.reviews import ReviewRepository
from bookworm.repositories.shelves import ShelfRepository
from bookworm.repositories.tutorials import TutorialRepository
from bookworm.repositories.users import UserRepository

__all__ = [
    "CollectionRepository",
    "BookRepository",
    "GenreRepository",
    "ReviewRepository",
    "ShelfRepository",
    "TutorialRepository",
    "UserRepository",
]
