import pytest

from book_queries import (
    delete_by_title,
    find_by_author,
    find_by_genre,
    find_by_title,
    find_in_stock_after,
    find_published_after,
    find_summaries,
    page_offset,
    paginate_by_title,
    sort_by_price,
    update_price,
)


def test_genre_filter_is_exact(collection, make_book):
    collection.insert_many([
        make_book("A", genre="Fantasy"),
        make_book("B", genre="Sci-Fi"),
        make_book("C", genre="fantasy"),
        make_book("D", genre="Dark Fantasy"),
    ])
    result = find_by_genre(collection, "Fantasy")
    assert [b["title"] for b in result] == ["A"]


def test_genre_filter_no_match_returns_empty_list(books):
    assert find_by_genre(books, "Cookbook") == []


def test_published_after_is_strict(collection, make_book):
    collection.insert_many([
        make_book("Old", year=1950),
        make_book("New", year=1951),
    ])
    assert [b["title"] for b in find_published_after(collection, 1950)] == ["New"]


def test_find_by_author(books):
    titles = sorted(b["title"] for b in find_by_author(books, "George Orwell"))
    assert titles == ["1984", "Animal Farm"]


def test_update_price_then_read_back(books):
    modified = update_price(books, "1984", 21.5)
    assert modified == 1
    assert find_by_title(books, "1984")["price"] == 21.5


def test_update_price_missing_title(books):
    assert update_price(books, "Nonexistent Book", 1.0) == 0


def test_update_price_touches_only_first_duplicate(collection, make_book):
    collection.insert_many([make_book("Twin", price=1.0), make_book("Twin", price=1.0)])
    assert update_price(collection, "Twin", 9.0) == 1
    prices = sorted(b["price"] for b in collection.find({"title": "Twin"}))
    assert prices == [1.0, 9.0]


def test_delete_missing_title(books):
    assert delete_by_title(books, "Nonexistent Book") == 0
    assert find_by_title(books, "Nonexistent Book") is None


def test_delete_then_verify(books):
    assert delete_by_title(books, "Moby Dick") == 1
    assert find_by_title(books, "Moby Dick") is None
    assert books.count_documents({}) == 11


def test_in_stock_after(collection, make_book):
    collection.insert_many([
        make_book("Fresh", year=2015, in_stock=True),
        make_book("Sold out", year=2015, in_stock=False),
        make_book("Backlist", year=2001, in_stock=True),
    ])
    assert [b["title"] for b in find_in_stock_after(collection, 2010)] == ["Fresh"]


def test_summaries_only_carry_projected_fields(books):
    summaries = find_summaries(books)
    assert len(summaries) == 12
    for doc in summaries:
        assert set(doc) == {"title", "author", "price"}


def test_sort_by_price_both_directions(books):
    asc = [b["price"] for b in sort_by_price(books)]
    desc = [b["price"] for b in sort_by_price(books, descending=True)]
    assert asc == sorted(asc)
    assert desc == sorted(desc, reverse=True)
    assert asc[0] == 7.99
    assert desc[0] == 19.99


def test_second_page_is_offset_five_to_nine(books):
    page = paginate_by_title(books, page=2, page_size=5)
    assert [b["title"] for b in page] == [
        "The Alchemist",
        "The Catcher in the Rye",
        "The Great Gatsby",
        "The Hobbit",
        "The Lord of the Rings",
    ]


def test_page_past_the_end_is_empty(collection, make_book):
    collection.insert_many([make_book(f"Book {i}") for i in range(5)])
    assert paginate_by_title(collection, page=2, page_size=5) == []


def test_page_offset():
    assert page_offset(1, 5) == 0
    assert page_offset(3, 5) == 10


@pytest.mark.parametrize("page,size", [(0, 5), (1, 0), (-1, 5)])
def test_page_offset_rejects_bad_values(page, size):
    with pytest.raises(ValueError):
        page_offset(page, size)
