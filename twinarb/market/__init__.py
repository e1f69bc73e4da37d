"""Order model, per-pair books and the book builder."""

from .order import Order
from .book import Book
from .builder import build_books, get_books, ordered_pair, FIRST_SEEN, LEXICOGRAPHIC

__all__ = [
    "Order",
    "Book",
    "build_books",
    "get_books",
    "ordered_pair",
    "FIRST_SEEN",
    "LEXICOGRAPHIC",
]
