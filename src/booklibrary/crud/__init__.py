from .crud_author import (
    get_author_by_id,
    get_authors,
    get_authors_by_nationality,
    search_authors,
    get_authors_by_ids,
    create_author,
    update_author,
    delete_author,
)
from .crud_book import (
    get_book_by_id,
    get_book_by_isbn,
    get_books,
    get_books_by_author,
    search_books,
    get_top_rated_books,
    get_books_by_ids,
    get_books_by_author_ids,
    get_books_by_genre_ids,
    create_book,
    update_book,
    delete_book,
)
from .crud_genre import (
    get_genre_by_id,
    get_genre_by_name,
    get_genres,
    get_genres_by_ids,
    get_genres_by_book_ids,
    create_genre,
    delete_genre,
)
from .crud_review import (
    create_review,
    get_review_by_id,
    get_reviews,
    get_reviews_for_book,
    get_reviews_by_reviewer,
    get_reviews_by_rating,
    get_reviews_by_book_ids,
    update_review,
    delete_review,
)

__all__ = [
    "get_author_by_id",
    "get_authors",
    "get_authors_by_nationality",
    "search_authors",
    "get_authors_by_ids",
    "create_author",
    "update_author",
    "delete_author",
    "get_book_by_id",
    "get_book_by_isbn",
    "get_books",
    "get_books_by_author",
    "search_books",
    "get_top_rated_books",
    "get_books_by_ids",
    "get_books_by_author_ids",
    "get_books_by_genre_ids",
    "create_book",
    "update_book",
    "delete_book",
    "get_genre_by_id",
    "get_genre_by_name",
    "get_genres",
    "get_genres_by_ids",
    "get_genres_by_book_ids",
    "create_genre",
    "delete_genre",
    "create_review",
    "get_review_by_id",
    "get_reviews",
    "get_reviews_for_book",
    "get_reviews_by_reviewer",
    "get_reviews_by_rating",
    "get_reviews_by_book_ids",
    "update_review",
    "delete_review",
]
