import math

import pytest

from blogsphere.errors import ValidationError
from blogsphere.extensions import db
from blogsphere.services.post_query import PostPage, PostQuery, search_posts


def titles(resp):
    return [p["title"] for p in resp.get_json()["posts"]]


def test_post_query_coerces_page_and_size_to_at_least_one():
    query = PostQuery(page=0, page_size=-3, search="   ", category="")

    assert query.page == 1
    assert query.page_size == 1
    assert query.search is None
    assert query.category is None
    assert query.sort == "newest"
    assert query.skip == 0


def test_post_query_accepts_sort_aliases():
    assert PostQuery(sort="-createdAt").sort == "newest"
    assert PostQuery(sort="createdAt").sort == "oldest"
    assert PostQuery(sort="-viewCount").sort == "mostViewed"
    assert PostQuery(sort="title").sort == "titleAscending"


def test_post_query_rejects_unknown_sort():
    with pytest.raises(ValidationError) as exc:
        PostQuery(sort="random")
    assert exc.value.errors[0]["field"] == "sort"


def test_post_page_total_pages():
    assert PostPage(items=[], total=7, current_page=1, page_size=3).total_pages == 3
    assert PostPage(items=[], total=6, current_page=1, page_size=3).total_pages == 2
    assert PostPage(items=[], total=0, current_page=1, page_size=3).total_pages == 0


def test_pagination_sizes_and_metadata(client, make_post):
    for i in range(7):
        make_post(title=f"Post {i}")
    page_size = 3
    total = 7

    for page in range(1, 5):
        resp = client.get(f"/posts?page={page}&limit={page_size}")
        assert resp.status_code == 200
        body = resp.get_json()
        skip = (page - 1) * page_size
        assert len(body["posts"]) == max(0, min(page_size, total - skip))
        assert body["total"] == total
        assert body["totalPages"] == math.ceil(total / page_size)
        assert body["currentPage"] == page
        assert body["pageSize"] == page_size


def test_pages_do_not_overlap(client, make_post):
    for i in range(5):
        make_post(title=f"Post {i}")

    seen = []
    for page in (1, 2, 3):
        seen += titles(client.get(f"/posts?page={page}&limit=2"))

    assert sorted(seen) == [f"Post {i}" for i in range(5)]


def test_page_beyond_range_is_empty_not_an_error(client, make_post):
    make_post(title="Only one")

    resp = client.get("/posts?page=50&limit=10")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["posts"] == []
    assert body["total"] == 1
    assert body["totalPages"] == 1
    assert body["currentPage"] == 50


def test_empty_listing(client):
    body = client.get("/posts").get_json()

    assert body == {"posts": [], "totalPages": 0, "currentPage": 1, "total": 0, "pageSize": 10}


@pytest.mark.parametrize("limit,expected", [("0", 1), ("-4", 1), ("1000", 50)])
def test_page_size_is_clamped(client, make_post, limit, expected):
    make_post(title="One")
    make_post(title="Two")

    body = client.get(f"/posts?limit={limit}").get_json()

    assert body["pageSize"] == expected
    assert len(body["posts"]) == min(expected, 2)
    assert body["totalPages"] == math.ceil(2 / expected)


def test_non_integer_page_is_rejected(client):
    resp = client.get("/posts?page=abc")

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["success"] is False
    assert body["errors"][0]["field"] == "page"


def test_unknown_sort_is_rejected(client):
    resp = client.get("/posts?sort=shuffle")

    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "sort"


def test_unpublished_posts_never_listed(client, make_post, make_category):
    tech = make_category("Tech")
    make_post(title="Public dragon", category=tech["id"])
    make_post(title="Draft dragon", category=tech["id"], isPublished=False)

    for query in ["", "?search=dragon", f"?category={tech['id']}", "?category=tech", "?sort=oldest", "?category=all"]:
        body = client.get(f"/posts{query}").get_json()
        assert [p["title"] for p in body["posts"]] == ["Public dragon"]
        assert body["total"] == 1


def test_posts_default_to_unpublished(client, alice):
    headers, _ = alice
    resp = client.post("/posts", json={"title": "Draft", "content": "x"}, headers=headers)

    assert resp.status_code == 201
    assert resp.get_json()["isPublished"] is False
    assert client.get("/posts").get_json()["total"] == 0


def test_search_is_case_insensitive_across_fields(client, make_post):
    make_post(title="In the title: DRAGON")
    make_post(title="Content match", content="<p>A dragon appears</p>")
    make_post(title="Excerpt match", excerpt="Here be dragons")
    make_post(title="Unrelated", content="Nothing to see")

    resp = client.get("/posts?search=Dragon")

    assert sorted(titles(resp)) == ["Content match", "Excerpt match", "In the title: DRAGON"]
    assert resp.get_json()["total"] == 3


def test_blank_search_is_same_as_absent(client, make_post):
    make_post(title="One")
    make_post(title="Two")

    assert titles(client.get("/posts?search=")) == titles(client.get("/posts"))
    assert titles(client.get("/posts?search=%20%20")) == titles(client.get("/posts"))


def test_search_treats_like_wildcards_literally(client, make_post):
    make_post(title="100% organic")
    make_post(title="1000 ideas")
    make_post(title="snake_case tips")
    make_post(title="snakeXcase tips")

    assert titles(client.get("/posts?search=100%25")) == ["100% organic"]
    assert titles(client.get("/posts?search=snake_case")) == ["snake_case tips"]


def test_category_filter_by_id_and_slug(client, make_post, make_category):
    tech = make_category("Tech")
    food = make_category("Food")
    make_post(title="Laptops", category=tech["id"])
    make_post(title="Pasta", category=food["id"])
    make_post(title="Uncategorized")

    assert titles(client.get(f"/posts?category={tech['id']}")) == ["Laptops"]
    assert titles(client.get("/posts?category=food")) == ["Pasta"]
    assert len(titles(client.get("/posts?category=all"))) == 3


def test_category_sentinel_is_case_sensitive(client, make_post, make_category):
    make_post(title="Anything")

    body = client.get("/posts?category=All").get_json()

    assert body["posts"] == []
    assert body["total"] == 0


def test_unknown_category_yields_empty_result(client, make_post):
    make_post(title="Anything")

    for value in ("999", "no-such-category"):
        resp = client.get(f"/posts?category={value}")
        assert resp.status_code == 200
        assert resp.get_json()["total"] == 0


def test_sort_orders(client, make_post):
    make_post(title="Bravo")
    second = make_post(title="Alpha")
    third = make_post(title="Charlie")
    client.get(f"/posts/{second['id']}")
    client.get(f"/posts/{second['id']}")
    client.get(f"/posts/{third['id']}")

    assert titles(client.get("/posts")) == ["Charlie", "Alpha", "Bravo"]
    assert titles(client.get("/posts?sort=newest")) == ["Charlie", "Alpha", "Bravo"]
    assert titles(client.get("/posts?sort=oldest")) == ["Bravo", "Alpha", "Charlie"]
    assert titles(client.get("/posts?sort=mostViewed")) == ["Alpha", "Charlie", "Bravo"]
    assert titles(client.get("/posts?sort=titleAscending")) == ["Alpha", "Bravo", "Charlie"]


def test_summary_projection(client, alice, make_post, make_category):
    _, user = alice
    tech = make_category("Tech")
    make_post(title="Shaped", excerpt="Short", category=tech["id"], featuredImage="https://cdn.example.com/a.png")

    post = client.get("/posts").get_json()["posts"][0]

    assert post["title"] == "Shaped"
    assert post["slug"] == "shaped"
    assert post["excerpt"] == "Short"
    assert post["featuredImage"] == "https://cdn.example.com/a.png"
    assert post["author"] == {"id": user["id"], "name": "Alice"}
    assert post["category"]["name"] == "Tech"
    assert post["commentCount"] == 0
    assert "content" not in post
    assert post["createdAt"]


def test_quick_search_returns_plain_list(client, make_post):
    make_post(title="Dragon tales")
    make_post(title="Dragon draft", isPublished=False)
    make_post(title="Cats")

    resp = client.get("/posts/search?q=dragon")

    assert resp.status_code == 200
    assert [p["title"] for p in resp.get_json()] == ["Dragon tales"]


def test_quick_search_requires_query(client):
    resp = client.get("/posts/search")

    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "q"


def test_quick_search_honours_limit(client, make_post):
    for i in range(4):
        make_post(title=f"Dragon {i}")

    assert len(client.get("/posts/search?q=dragon&limit=2").get_json()) == 2


def test_comment_counts_come_from_the_listing_query(app, client, alice, make_post):
    headers, _ = alice
    busy = make_post(title="Busy")
    make_post(title="Quiet")
    for text in ("one", "two"):
        client.post(f"/posts/{busy['id']}/comments", json={"content": text}, headers=headers)

    body = client.get("/posts?sort=titleAscending").get_json()
    assert [(p["title"], p["commentCount"]) for p in body["posts"]] == [("Busy", 2), ("Quiet", 0)]

    db.session.expunge_all()
    page = search_posts(PostQuery(page_size=10))
    assert [p.comment_count for p in page.items] == [0, 2]
    assert all("comments" not in vars(p) for p in page.items)
