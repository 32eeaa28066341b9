# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from booklibrary.db.session import Base, enable_sqlite_foreign_keys
# Import all models to ensure they are registered with Base
from booklibrary.models import author, book, genre, review  # noqa: F401
from booklibrary.models.author import Author
from booklibrary.models.book import Book
from booklibrary.models.genre import Genre
from booklibrary.models.review import Review

# --- Test Database Setup ---
# Use an in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="session")
def db_engine():
    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="session")
def db_session_factory(db_engine):
    """Returns a SQLAlchemy session factory."""
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(db_engine, db_session_factory):
    """Provides a transactional scope around a test function."""
    connection = db_engine.connect()
    # Begin a non-ORM transaction; commits made by the code under test stay inside it
    transaction = connection.begin()
    session = db_session_factory(bind=connection)

    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


# --- Shared entity fixtures ---

@pytest.fixture
def test_author(db_session):
    author_obj = Author(name="Douglas Adams", nationality="British")
    db_session.add(author_obj)
    db_session.flush()
    return author_obj


@pytest.fixture
def test_genres(db_session):
    genres = [Genre(name="Science Fiction"), Genre(name="Comedy"), Genre(name="Classic")]
    db_session.add_all(genres)
    db_session.flush()
    return genres


@pytest.fixture
def test_book(db_session, test_author):
    book_obj = Book(
        title="The Hitchhiker's Guide to the Galaxy",
        isbn="978-0345391803",
        description="Arthur Dent is plucked off the planet.",
        author_id=test_author.id,
    )
    db_session.add(book_obj)
    db_session.flush()
    return book_obj


@pytest.fixture
def make_review(db_session):
    """Factory adding a flushed review to a book."""
    def _make(book_obj, rating, reviewer_name="Reviewer", comment=None):
        review_obj = Review(rating=rating, reviewer_name=reviewer_name, comment=comment)
        book_obj.add_review(review_obj)
        db_session.flush()
        return review_obj
    return _make
