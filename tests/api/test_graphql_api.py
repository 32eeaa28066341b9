# tests/api/test_graphql_api.py
import asyncio

import pytest
from fastapi.testclient import TestClient

from booklibrary.api.context import GraphQLContext, get_broker
from booklibrary.api.schema import schema
from booklibrary.api.types import BookType
from booklibrary.core.config import settings
from booklibrary.core.events import BOOK_ADDED, REVIEW_POSTED, EventBroker
from booklibrary.db.session import get_db
from booklibrary.main import app
from booklibrary.models.book import Book


class RecordingBroker:
    def __init__(self):
        self.published = []

    def publish(self, topic, payload):
        self.published.append((topic, payload))
        return 1


class FailingBroker:
    def publish(self, topic, payload):
        raise RuntimeError("broker unavailable")


@pytest.fixture
def events():
    return RecordingBroker()


@pytest.fixture
def client(db_session, events):
    """TestClient bound to the test transaction. The lifespan is not started."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broker] = lambda: events
    yield TestClient(app)
    app.dependency_overrides.clear()


def gql(client, query, variables=None):
    response = client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert response.status_code == 200
    return response.json()


def error_code(result):
    assert result.get("errors"), result
    return result["errors"][0]["extensions"]["code"]


ADD_AUTHOR = """
mutation AddAuthor($input: AddAuthorInput!) {
  addAuthor(input: $input) { id name nationality }
}
"""

ADD_BOOK = """
mutation AddBook($input: AddBookInput!) {
  addBook(input: $input) { id title isbn language authorId }
}
"""

ADD_REVIEW = """
mutation AddReview($input: AddReviewInput!) {
  addReview(input: $input) { id rating reviewerName bookId updatedAt }
}
"""

BOOK_DETAILS = """
query Book($id: Int!) {
  book(id: $id) {
    title
    author { name }
    genres { name }
    reviews { rating }
    averageRating
    reviewCount
  }
}
"""


def test_root_redirects_to_graphql(client):
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/graphql"


def test_add_author_and_book_then_query_relations(client, test_genres):
    author = gql(client, ADD_AUTHOR, {"input": {"name": "Ursula K. Le Guin", "nationality": "American"}})
    author_id = author["data"]["addAuthor"]["id"]
    scifi, _, classic = test_genres

    result = gql(client, ADD_BOOK, {"input": {
        "title": "The Left Hand of Darkness",
        "isbn": "978-0441478125",
        "authorId": author_id,
        "publishedDate": "1969-03-01",
        "genreIds": [scifi.id, classic.id],
    }})

    book = result["data"]["addBook"]
    assert book["title"] == "The Left Hand of Darkness"
    assert book["language"] == "English"
    assert book["authorId"] == author_id

    details = gql(client, BOOK_DETAILS, {"id": book["id"]})["data"]["book"]
    assert details["author"] == {"name": "Ursula K. Le Guin"}
    assert details["genres"] == [{"name": "Science Fiction"}, {"name": "Classic"}]
    assert details["reviews"] == []
    assert details["averageRating"] is None
    assert details["reviewCount"] == 0


def test_book_aggregates(client, test_book):
    for rating in (5, 4, 4):
        result = gql(client, ADD_REVIEW, {"input": {"bookId": test_book.id, "rating": rating, "reviewerName": "Reader"}})
        assert "errors" not in result

    details = gql(client, BOOK_DETAILS, {"id": test_book.id})["data"]["book"]
    assert details["averageRating"] == 4.33
    assert details["reviewCount"] == 3


def test_author_books_and_count(client, test_author, test_book):
    query = "query($id: Int!) { author(id: $id) { name bookCount books { title } } }"
    author = gql(client, query, {"id": test_author.id})["data"]["author"]
    assert author == {
        "name": "Douglas Adams",
        "bookCount": 1,
        "books": [{"title": "The Hitchhiker's Guide to the Galaxy"}],
    }


def test_missing_entities_resolve_to_null(client):
    result = gql(client, "{ book(id: 9999) { id } author(id: 9999) { id } genre(id: 9999) { id } }")
    assert result["data"] == {"book": None, "author": None, "genre": None}


def test_add_book_unknown_author(client, db_session):
    result = gql(client, ADD_BOOK, {"input": {"title": "Ghost", "authorId": 9999}})

    assert error_code(result) == "AUTHOR_NOT_FOUND"
    assert result["errors"][0]["extensions"]["authorId"] == 9999
    assert result["errors"][0]["message"] == "Author with ID '9999' was not found."
    assert db_session.query(Book).count() == 0


def test_add_book_duplicate_isbn(client, test_author, test_book):
    result = gql(client, ADD_BOOK, {"input": {"title": "Copy", "isbn": test_book.isbn, "authorId": test_author.id}})

    assert error_code(result) == "DUPLICATE_ISBN"
    assert result["errors"][0]["extensions"]["isbn"] == test_book.isbn


def test_add_book_unknown_genre(client, test_author, test_genres):
    result = gql(client, ADD_BOOK, {"input": {
        "title": "Mixed", "authorId": test_author.id, "genreIds": [test_genres[0].id, 777],
    }})

    assert error_code(result) == "GENRE_NOT_FOUND"
    assert result["errors"][0]["extensions"]["genreId"] == 777


def test_add_book_blank_title(client, test_author):
    result = gql(client, ADD_BOOK, {"input": {"title": "  ", "authorId": test_author.id}})

    assert error_code(result) == "BLANK_REQUIRED_FIELD"
    assert result["errors"][0]["extensions"]["field"] == "title"


def test_add_review_invalid_rating(client, test_book):
    result = gql(client, ADD_REVIEW, {"input": {"bookId": test_book.id, "rating": 6, "reviewerName": "Reader"}})

    assert error_code(result) == "INVALID_RATING"
    assert result["errors"][0]["extensions"]["rating"] == 6
    assert result["data"] is None


def test_add_review_malformed_email(client, test_book):
    result = gql(client, ADD_REVIEW, {"input": {
        "bookId": test_book.id, "rating": 4, "reviewerName": "Reader", "reviewerEmail": "nope",
    }})

    assert error_code(result) == "VALIDATION_ERROR"
    assert result["errors"][0]["extensions"]["errors"][0]["field"] == "reviewer_email"


def test_update_book_partial_and_genre_replacement(client, test_book, test_genres):
    scifi, comedy, classic = test_genres
    mutation = """
    mutation($input: UpdateBookInput!) {
      updateBook(input: $input) { id title isbn pageCount genres { name } }
    }
    """
    gql(client, mutation, {"input": {"id": test_book.id, "genreIds": [scifi.id, comedy.id]}})

    result = gql(client, mutation, {"input": {"id": test_book.id, "pageCount": 224, "genreIds": [classic.id]}})

    book = result["data"]["updateBook"]
    assert book["title"] == "The Hitchhiker's Guide to the Galaxy"
    assert book["isbn"] == "978-0345391803"
    assert book["pageCount"] == 224
    assert book["genres"] == [{"name": "Classic"}]


def test_update_book_not_found(client):
    result = gql(client, "mutation { updateBook(input: {id: 9999, title: \"X\"}) { id } }")
    assert error_code(result) == "BOOK_NOT_FOUND"


def test_update_and_delete_review(client, test_book, make_review):
    review = make_review(test_book, 2)

    updated = gql(
        client,
        "mutation($id: Int!) { updateReview(input: {id: $id, rating: 4}) { rating comment updatedAt } }",
        {"id": review.id},
    )["data"]["updateReview"]
    assert updated["rating"] == 4
    assert updated["comment"] is None
    assert updated["updatedAt"] is not None

    deleted = gql(client, "mutation($id: Int!) { deleteReview(id: $id) }", {"id": review.id})
    assert deleted["data"]["deleteReview"] is True

    again = gql(client, "mutation($id: Int!) { deleteReview(id: $id) }", {"id": review.id})
    assert error_code(again) == "REVIEW_NOT_FOUND"


def test_delete_author_cascades(client, test_author, test_book, make_review):
    make_review(test_book, 5)

    result = gql(client, "mutation($id: Int!) { deleteAuthor(id: $id) }", {"id": test_author.id})

    assert result["data"]["deleteAuthor"] is True
    remaining = gql(client, "{ books { id } reviews { id } authors { id } }")["data"]
    assert remaining == {"books": [], "reviews": [], "authors": []}


def test_delete_genre(client, db_session, test_book, test_genres):
    test_book.replace_genres(test_genres)
    db_session.flush()

    missing = gql(client, "mutation { deleteGenre(id: 9999) }")
    assert error_code(missing) == "GENRE_NOT_FOUND"

    result = gql(client, "mutation($id: Int!) { deleteGenre(id: $id) }", {"id": test_genres[0].id})
    assert result["data"]["deleteGenre"] is True
    genres = gql(client, BOOK_DETAILS, {"id": test_book.id})["data"]["book"]["genres"]
    assert genres == [{"name": "Comedy"}, {"name": "Classic"}]


def test_add_genre_and_list(client):
    result = gql(client, 'mutation { addGenre(input: {name: "Poetry"}) { id name description } }')
    assert result["data"]["addGenre"]["name"] == "Poetry"
    assert result["data"]["addGenre"]["description"] is None

    genres = gql(client, "{ genres { name books { id } } }")["data"]["genres"]
    assert genres == [{"name": "Poetry", "books": []}]


def test_top_rated_books(client, test_author, test_book, make_review):
    second = Book(title="Dirk Gently's Holistic Detective Agency", author_id=test_author.id)
    test_author.add_book(second)
    make_review(test_book, 3)
    make_review(second, 5)

    result = gql(client, "{ topRatedBooks { title averageRating } }")

    assert result["data"]["topRatedBooks"] == [
        {"title": "Dirk Gently's Holistic Detective Agency", "averageRating": 5.0},
        {"title": "The Hitchhiker's Guide to the Galaxy", "averageRating": 3.0},
    ]
    one = gql(client, "{ topRatedBooks(count: 1) { title } }")["data"]["topRatedBooks"]
    assert len(one) == 1


def test_search_and_filters(client, test_author, test_book, make_review):
    make_review(test_book, 4, reviewer_name="Alice Johnson")

    data = gql(client, """
    {
      searchBooks(searchTerm: "guide") { title }
      searchAuthors(searchTerm: "adams") { name }
      authorsByNationality(nationality: "British") { name }
      reviewsByReviewer(reviewerName: "alice") { rating }
      reviewsByRating(rating: 4) { reviewerName }
      booksByAuthor(authorId: %d) { title }
    }
    """ % test_author.id)["data"]

    assert data["searchBooks"] == [{"title": test_book.title}]
    assert data["searchAuthors"] == [{"name": "Douglas Adams"}]
    assert data["authorsByNationality"] == [{"name": "Douglas Adams"}]
    assert data["reviewsByReviewer"] == [{"rating": 4}]
    assert data["reviewsByRating"] == [{"reviewerName": "Alice Johnson"}]
    assert data["booksByAuthor"] == [{"title": test_book.title}]


def test_add_book_and_review_publish_after_commit(client, events, test_author, db_session):
    book = gql(client, ADD_BOOK, {"input": {"title": "Mostly Harmless", "authorId": test_author.id}})["data"]["addBook"]
    gql(client, ADD_REVIEW, {"input": {"bookId": book["id"], "rating": 5, "reviewerName": "Reader"}})

    topics = [topic for topic, _ in events.published]
    assert topics == [BOOK_ADDED, REVIEW_POSTED]
    assert events.published[0][1].title == "Mostly Harmless"
    assert events.published[0][1].id == book["id"]


def test_rejected_mutations_publish_nothing(client, events, test_book):
    gql(client, ADD_BOOK, {"input": {"title": "Ghost", "authorId": 9999}})
    gql(client, ADD_REVIEW, {"input": {"bookId": test_book.id, "rating": 0, "reviewerName": "Reader"}})

    assert events.published == []


def test_failing_broker_does_not_fail_the_mutation(client, test_author, db_session):
    app.dependency_overrides[get_broker] = lambda: FailingBroker()

    result = gql(client, ADD_BOOK, {"input": {"title": "Young Zaphod", "authorId": test_author.id}})

    assert "errors" not in result
    assert db_session.get(Book, result["data"]["addBook"]["id"]) is not None


def test_book_added_subscription_receives_published_books(db_session, test_book):
    broker = EventBroker()

    async def scenario():
        context = GraphQLContext(db=db_session, events=broker)
        subscription = await schema.subscribe(
            "subscription { onBookAdded { id title } }",
            context_value=context,
        )
        pending = asyncio.ensure_future(subscription.__anext__())
        for _ in range(100):
            if broker.subscriber_count(BOOK_ADDED):
                break
            await asyncio.sleep(0)

        broker.publish(BOOK_ADDED, BookType.from_model(test_book))
        result = await asyncio.wait_for(pending, timeout=5)
        await subscription.aclose()
        return result

    result = asyncio.run(scenario())

    assert result.errors is None
    assert result.data == {"onBookAdded": {"id": test_book.id, "title": test_book.title}}

def test_later_mutations_in_one_request_see_earlier_writes(client, test_book):
    result = gql(client, """
    mutation($id: Int!) {
      first: addReview(input: {bookId: $id, rating: 5, reviewerName: "Alice"}) {
        book { averageRating reviewCount }
      }
      second: addReview(input: {bookId: $id, rating: 1, reviewerName: "Bob"}) {
        book { averageRating reviewCount reviews { rating } }
      }
    }
    """, {"id": test_book.id})

    assert "errors" not in result
    assert result["data"]["first"]["book"] == {"averageRating": 5.0, "reviewCount": 1}
    assert result["data"]["second"]["book"] == {
        "averageRating": 3.0,
        "reviewCount": 2,
        "reviews": [{"rating": 5}, {"rating": 1}],
    }


def test_sequential_genre_replacements_in_one_request(client, test_book, test_genres):
    scifi, comedy, _ = test_genres
    result = gql(client, """
    mutation($id: Int!, $first: [Int!], $second: [Int!]) {
      u1: updateBook(input: {id: $id, genreIds: $first}) { genres { name } }
      u2: updateBook(input: {id: $id, genreIds: $second}) { genres { name } }
    }
    """, {"id": test_book.id, "first": [scifi.id], "second": [comedy.id]})

    assert result["data"]["u1"]["genres"] == [{"name": "Science Fiction"}]
    assert result["data"]["u2"]["genres"] == [{"name": "Comedy"}]


def test_add_genre_duplicate_name_is_a_storage_error(client, test_genres, monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    result = gql(client, 'mutation { addGenre(input: {name: "Comedy"}) { id } }')

    assert error_code(result) == "INFRASTRUCTURE_ERROR"
    extensions = result["errors"][0]["extensions"]
    assert "detail" not in extensions
    assert result["errors"][0]["message"] == "The operation could not be completed because of a storage error."
