from blogsphere.models import Post, User
from blogsphere.extensions import db
from blogsphere.utils.slugs import generate_unique_slug, make_slug


def test_make_slug_strips_punctuation_and_collapses_whitespace():
    assert make_slug("Hello, World!  Foo") == "hello-world-foo"
    assert make_slug("  My   First -- Post  ") == "my-first-post"


def test_make_slug_is_idempotent():
    for title in ["Hello, World!  Foo", "Dragons & Dungeons", "100% pure_code"]:
        slug = make_slug(title)
        assert make_slug(slug) == slug


def test_make_slug_of_empty_text():
    assert make_slug("") == ""
    assert make_slug(None) == ""


def test_generate_unique_slug_appends_counter(app):
    author = User(name="Alice", email="alice@example.com")
    author.set_password("secret123")
    db.session.add(author)
    db.session.add(Post(title="Same title", slug="same-title", content="x", author=author))
    db.session.commit()

    assert generate_unique_slug(Post, "Same Title") == "same-title-2"

    db.session.add(Post(title="Same title", slug="same-title-2", content="x", author=author))
    db.session.commit()
    assert generate_unique_slug(Post, "Same Title") == "same-title-3"


def test_generate_unique_slug_ignores_the_post_being_renamed(app):
    author = User(name="Alice", email="alice@example.com")
    author.set_password("secret123")
    post = Post(title="Keep me", slug="keep-me", content="x", author=author)
    db.session.add(post)
    db.session.commit()

    assert generate_unique_slug(Post, "Keep me", exclude_id=post.id) == "keep-me"


def test_generate_unique_slug_falls_back_when_title_has_no_words(app):
    assert generate_unique_slug(Post, "!!!") == "post"
