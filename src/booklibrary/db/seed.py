"""
Datos de ejemplo para poblar una base de datos vacía.

Creates a small, reproducible catalog: genres, authors, books with their
genre sets and a handful of reviews per book. Running it on a database that
already has authors does nothing.
"""

import datetime
import logging
import random
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from booklibrary.db.session import commit_or_rollback
from booklibrary.models.author import Author
from booklibrary.models.book import Book
from booklibrary.models.genre import Genre
from booklibrary.models.review import Review, utcnow

logger = logging.getLogger(__name__)

SEED = 42

GENRES = [
    ("Science Fiction", "Stories based on futuristic science and technology"),
    ("Fantasy", "Stories featuring magical or supernatural elements"),
    ("Mystery", "Stories involving crime solving and suspense"),
    ("Horror", "Stories designed to frighten and create suspense"),
    ("Classic", "Timeless literature of lasting significance"),
    ("Thriller", "Fast-paced stories with excitement and suspense"),
    ("Comedy", "Humorous stories designed to entertain"),
    ("Dystopian", "Stories set in oppressive or post-apocalyptic societies"),
]

AUTHORS = [
    ("Douglas Adams",
     "English author, humorist, and screenwriter best known for The Hitchhiker's Guide to the Galaxy.",
     datetime.date(1952, 3, 11), "British"),
    ("George Orwell",
     "English novelist, essayist, and critic famous for his works 1984 and Animal Farm.",
     datetime.date(1903, 6, 25), "British"),
    ("J.K. Rowling",
     "British author best known for the Harry Potter fantasy series.",
     datetime.date(1965, 7, 31), "British"),
    ("Stephen King",
     "American author of horror, supernatural fiction, suspense, and fantasy novels.",
     datetime.date(1947, 9, 21), "American"),
    ("Agatha Christie",
     "English writer known for her detective novels featuring Hercule Poirot and Miss Marple.",
     datetime.date(1890, 9, 15), "British"),
]

# (title, isbn, description, published, pages, publisher, author, genres)
BOOKS = [
    ("The Hitchhiker's Guide to the Galaxy", "978-0345391803",
     "Seconds before the Earth is demolished to make way for a galactic freeway, Arthur Dent is plucked "
     "off the planet by his friend Ford Prefect.",
     datetime.date(1979, 10, 12), 224, "Pan Books", "Douglas Adams", ["Science Fiction", "Comedy"]),
    ("The Restaurant at the End of the Universe", "978-0345391810",
     "The second book in the Hitchhiker's Guide trilogy follows the adventures of Arthur Dent and his friends.",
     datetime.date(1980, 10, 1), 250, "Pan Books", "Douglas Adams", ["Science Fiction", "Comedy"]),
    ("1984", "978-0451524935",
     "A dystopian novel set in Airstrip One, a province of the superstate Oceania in a world of perpetual "
     "war and government surveillance.",
     datetime.date(1949, 6, 8), 328, "Secker & Warburg", "George Orwell",
     ["Classic", "Dystopian", "Science Fiction"]),
    ("Animal Farm", "978-0451526342",
     "An allegorical novella reflecting events leading up to the Russian Revolution and the Stalinist era "
     "of the Soviet Union.",
     datetime.date(1945, 8, 17), 112, "Secker & Warburg", "George Orwell", ["Classic", "Dystopian"]),
    ("Harry Potter and the Philosopher's Stone", "978-0747532699",
     "Harry Potter discovers on his 11th birthday that he is the orphaned son of two powerful wizards and "
     "possesses magical powers of his own.",
     datetime.date(1997, 6, 26), 223, "Bloomsbury", "J.K. Rowling", ["Fantasy"]),
    ("Harry Potter and the Chamber of Secrets", "978-0747538493",
     "Harry's second year at Hogwarts is filled with fresh horrors, including an ancient prophecy of doom.",
     datetime.date(1998, 7, 2), 251, "Bloomsbury", "J.K. Rowling", ["Fantasy"]),
    ("Harry Potter and the Prisoner of Azkaban", "978-0747546290",
     "Harry's third year involves a dangerous prisoner who has escaped from Azkaban, the wizard prison.",
     datetime.date(1999, 7, 8), 317, "Bloomsbury", "J.K. Rowling", ["Fantasy"]),
    ("The Shining", "978-0385121675",
     "Jack Torrance's new job as the winter caretaker of the isolated Overlook Hotel leads to a "
     "supernatural descent into madness.",
     datetime.date(1977, 1, 28), 447, "Doubleday", "Stephen King", ["Horror", "Thriller"]),
    ("It", "978-1501142970",
     "Seven adults return to their hometown to confront a nightmare they first encountered as teenagers: "
     "a murderous clown called Pennywise.",
     datetime.date(1986, 9, 15), 1138, "Viking", "Stephen King", ["Horror"]),
    ("Murder on the Orient Express", "978-0007119318",
     "Detective Hercule Poirot investigates the murder of an American tycoon aboard the famous train.",
     datetime.date(1934, 1, 1), 256, "Collins Crime Club", "Agatha Christie", ["Mystery", "Classic"]),
    ("And Then There Were None", "978-0062073488",
     "Ten strangers are lured to an isolated island mansion where they are accused of getting away with murder.",
     datetime.date(1939, 11, 6), 272, "Collins Crime Club", "Agatha Christie",
     ["Mystery", "Thriller", "Classic"]),
]

REVIEWERS = [
    "Alice Johnson", "Bob Smith", "Charlie Brown", "Diana Ross", "Edward Norton",
    "Fiona Apple", "George Lucas", "Hannah Montana", "Ivan Drago", "Julia Roberts",
]

COMMENTS: Dict[int, List[str]] = {
    5: ["Absolutely amazing!", "A masterpiece!", "Couldn't put it down!",
        "One of the best books I've ever read!", "Highly recommended!"],
    4: ["Really enjoyed this one.", "Great read!", "Well written and engaging.",
        "Almost perfect!", "Very entertaining."],
    3: ["It was okay.", "Decent read.", "Had its moments.", "Not bad, not great.", "Average but enjoyable."],
    2: ["Expected more.", "Disappointing.", "Struggled to finish.", "Not my cup of tea.", "Could have been better."],
    1: ["Didn't enjoy it at all.", "Not recommended.", "Waste of time.", "Very disappointing.",
        "Couldn't finish it."],
}


def _weighted_rating(rng: random.Random) -> int:
    """Ratings skewed towards the high end: 5%/10%/20%/30%/35% for 1..5."""
    roll = rng.randrange(100)
    if roll < 5:
        return 1
    if roll < 15:
        return 2
    if roll < 35:
        return 3
    if roll < 65:
        return 4
    return 5


def _build_reviews(book: Book, rng: random.Random) -> List[Review]:
    reviewers = rng.sample(REVIEWERS, rng.randint(2, 5))
    reviews = []
    for reviewer in reviewers:
        rating = _weighted_rating(rng)
        reviews.append(Review(
            rating=rating,
            reviewer_name=reviewer,
            reviewer_email=f"{reviewer.lower().replace(' ', '.')}@email.com",
            comment=rng.choice(COMMENTS[rating]),
            created_at=utcnow() - datetime.timedelta(days=rng.randint(1, 364)),
        ))
    return reviews


def seed_database(db: Session) -> bool:
    """
    Puebla la base de datos con el catálogo de ejemplo si no hay autores.

    Args:
        db (Session): Sesión SQLAlchemy activa.

    Returns:
        bool: True si se insertaron datos, False si ya existían.
    """
    if db.execute(select(Author.id).limit(1)).first() is not None:
        logger.info("Database already contains authors; skipping seed.")
        return False

    rng = random.Random(SEED)

    genres = {name: Genre(name=name, description=description) for name, description in GENRES}
    authors = {
        name: Author(name=name, biography=biography, date_of_birth=born, nationality=nationality)
        for name, biography, born, nationality in AUTHORS
    }

    review_total = 0
    for title, isbn, description, published, pages, publisher, author_name, genre_names in BOOKS:
        book = Book(
            title=title,
            isbn=isbn,
            description=description,
            published_date=published,
            page_count=pages,
            publisher=publisher,
        )
        book.replace_genres(genres[name] for name in genre_names)
        for review in _build_reviews(book, rng):
            book.add_review(review)
            review_total += 1
        authors[author_name].add_book(book)

    db.add_all(genres.values())
    db.add_all(authors.values())
    commit_or_rollback(db, "seed data")
    logger.info(
        f"Seeded {len(genres)} genres, {len(authors)} authors, {len(BOOKS)} books and {review_total} reviews."
    )
    return True
