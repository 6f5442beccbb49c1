import pytest
from django.urls import reverse

from dashboard.samples import DEFAULT_SETTINGS
from dashboard.tables import DataServiceError


def post_form(**overrides):
    data = {
        "title": "First post",
        "slug": "first-post",
        "excerpt": "Short",
        "content": "<p>Body</p>",
        "featured_image": "",
        "status": "draft",
        "meta_title": "",
        "meta_description": "",
    }
    data.update(overrides)
    return data


def settings_form(**overrides):
    data = {k: ("" if v is None else v) for k, v in DEFAULT_SETTINGS.items()}
    data["action"] = "save"
    data.update(overrides)
    return data


class TestDashboardView:
    def test_renders_samples_when_empty(self, client, use_data):
        response = client.get(reverse("dashboard:index"))
        assert response.status_code == 200
        body = response.content.decode()
        assert "Getting Started with React" in body
        assert "About Us" in body
        assert "No posts found" not in body
        assert response.context["counts"] == {"posts": 3, "pages": 2, "media": 12}

    def test_renders_real_rows(self, client, use_data, sample_post):
        use_data.posts.count_value = 1
        use_data.posts.rows = [sample_post]
        response = client.get(reverse("dashboard:index"))
        body = response.content.decode()
        assert "First post" in body
        assert "Getting Started with React" not in body
        assert "Mar 4, 2024" in body
        assert response.context["counts"]["posts"] == 1

    def test_service_error_still_renders(self, client, use_data):
        use_data.posts.errors["count"] = DataServiceError("boom")
        response = client.get(reverse("dashboard:index"))
        assert response.status_code == 200
        assert response.context["counts"]["posts"] == 3

    def test_root_redirects_to_dashboard(self, client):
        response = client.get("/")
        assert response.status_code == 302
        assert response["Location"] == "/dashboard/"

    def test_unconfigured_service(self, client, monkeypatch):
        def unavailable(request):
            raise RuntimeError("SUPABASE_URL or SUPABASE_KEY is not configured in environment.")

        monkeypatch.setattr("dashboard.views.get_data_service", unavailable)
        response = client.get(reverse("dashboard:index"))
        assert response.status_code == 503
        assert "not configured" in response.content.decode()


def test_stats_api(client, use_data):
    use_data.media.count_value = 40
    response = client.get(reverse("api:dashboard-stats"))
    assert response.status_code == 200
    payload = response.json()
    assert payload["loading"] is False
    assert payload["counts"] == {"posts": 3, "pages": 2, "media": 40}


def test_posts_listing(client, use_data, sample_post):
    use_data.posts.rows = [sample_post]
    response = client.get(reverse("dashboard:posts"))
    assert response.status_code == 200
    assert "First post" in response.content.decode()
    assert ("posts", "list_recent", 50) in use_data.calls


def test_pages_listing_error(client, use_data):
    use_data.pages.errors["list_recent"] = DataServiceError("relation \"pages\" does not exist")
    response = client.get(reverse("dashboard:pages"))
    assert response.status_code == 200
    assert "does not exist" in response.content.decode()


def test_health(client):
    assert client.get("/health/").content == b"OK"


class TestEditPostView:
    url = staticmethod(lambda ident: reverse("dashboard:post-edit", args=[ident]))

    def test_not_found(self, client, use_data):
        response = client.get(self.url("404"))
        assert response.status_code == 404
        body = response.content.decode()
        assert "Post not found" in body
        assert "Go back to posts" in body

    def test_renders_form(self, client, use_data, sample_post):
        use_data.posts.by_id["7"] = sample_post
        response = client.get(self.url(7))
        assert response.status_code == 200
        body = response.content.decode()
        assert 'value="First post"' in body
        assert "Save Post" in body
        assert "rich-text-editor" in body

    def test_save_redirects_to_listing(self, client, use_data, sample_post):
        use_data.posts.by_id["7"] = sample_post
        response = client.post(self.url(7), post_form(title="Edited", slug="edited-by-hand"))
        assert response.status_code == 302
        assert response["Location"] == reverse("dashboard:posts")
        (_, _, ident, record), = use_data.ops("update")
        assert ident == "7"
        assert record["title"] == "Edited"
        assert record["slug"] == "edited-by-hand"
        assert record["content"] == "<p>Body</p>"

    def test_auto_slug_derives_from_title(self, client, use_data, sample_post):
        use_data.posts.by_id["7"] = sample_post
        client.post(self.url(7), post_form(title="Hello, World!", slug="ignored", auto_slug="on"))
        (_, _, _, record), = use_data.ops("update")
        assert record["slug"] == "hello-world"

    def test_missing_title(self, client, use_data, sample_post):
        use_data.posts.by_id["7"] = sample_post
        response = client.post(self.url(7), post_form(title=""))
        assert response.status_code == 400
        assert "Title is required" in response.content.decode()
        assert use_data.ops("update") == []

    def test_invalid_post_keeps_every_submitted_value(self, client, use_data, sample_post):
        use_data.posts.by_id["7"] = sample_post
        submitted = post_form(
            title="",
            slug="typed-slug",
            excerpt="Typed excerpt",
            content="Typed body",
            featured_image="https://example.com/typed.jpg",
            status="published",
            meta_title="Typed meta",
            meta_description="Typed description",
        )
        response = client.post(self.url(7), submitted)
        assert response.status_code == 400
        body = response.content.decode()
        assert 'value="typed-slug"' in body
        assert 'value="https://example.com/typed.jpg"' in body
        assert 'value="Typed meta"' in body
        assert '<option value="published" selected>' in body
        for text in ("Typed excerpt", "Typed body", "Typed description"):
            assert text in body

    def test_long_title_is_accepted(self, client, use_data, sample_post):
        use_data.posts.by_id["7"] = sample_post
        title = "t" * 300
        response = client.post(self.url(7), post_form(title=title, slug="long"))
        assert response.status_code == 302
        (_, _, _, record), = use_data.ops("update")
        assert record["title"] == title

    def test_missing_status_keeps_stored_one(self, client, use_data, sample_post):
        use_data.posts.by_id["7"] = dict(sample_post, status="published")
        submitted = post_form(title="Edited")
        del submitted["status"]
        response = client.post(self.url(7), submitted)
        assert response.status_code == 302
        (_, _, _, record), = use_data.ops("update")
        assert record["status"] == "published"

    def test_unknown_status_is_rejected(self, client, use_data, sample_post):
        use_data.posts.by_id["7"] = sample_post
        response = client.post(self.url(7), post_form(status="archived"))
        assert response.status_code == 400
        assert use_data.ops("update") == []

    def test_update_failure_shows_inline_error(self, client, use_data, sample_post):
        use_data.posts.by_id["7"] = sample_post
        use_data.posts.errors["update"] = DataServiceError("duplicate key value violates unique constraint")
        response = client.post(self.url(7), post_form(title="Edited"))
        assert response.status_code == 200
        body = response.content.decode()
        assert "duplicate key value violates unique constraint" in body
        assert 'value="Edited"' in body

    def test_duplicate_submit_rejected(self, client, use_data, sample_post):
        from dashboard.guards import save_guard

        use_data.posts.by_id["7"] = sample_post
        with save_guard.hold(("posts", "7")):
            response = client.post(self.url(7), post_form())
        assert response.status_code == 409
        assert use_data.ops("update") == []


class TestSettingsView:
    url = staticmethod(lambda: reverse("dashboard:settings"))

    def test_defaults(self, client, use_data):
        response = client.get(self.url())
        assert response.status_code == 200
        assert 'value="My CMS"' in response.content.decode()

    def test_first_save_inserts(self, client, use_data):
        response = client.post(self.url(), settings_form(site_title="Fresh"), follow=True)
        assert response.status_code == 200
        assert "Settings saved successfully!" in response.content.decode()
        assert len(use_data.ops("insert")) == 1
        assert use_data.ops("update") == []

    def test_existing_row_updates(self, client, use_data):
        use_data.settings.single = dict(DEFAULT_SETTINGS, id=7)
        response = client.post(self.url(), settings_form(posts_per_page="12"))
        assert response.status_code == 302
        (_, _, ident, record), = use_data.ops("update")
        assert ident == 7
        assert record["posts_per_page"] == 12

    @pytest.mark.parametrize("value, message", [("0", "Minimum value is 1"), ("51", "Maximum value is 50")])
    def test_out_of_range(self, client, use_data, value, message):
        response = client.post(self.url(), settings_form(posts_per_page=value))
        assert response.status_code == 400
        assert message in response.content.decode()
        assert use_data.ops("insert") == []

    def test_fractional_posts_per_page(self, client, use_data):
        response = client.post(self.url(), settings_form(posts_per_page="1.5"))
        assert response.status_code == 400
        assert "Posts per page must be a number" in response.content.decode()
        assert use_data.ops("insert") == []

    def test_long_site_title_saves(self, client, use_data):
        site_title = "s" * 300
        response = client.post(self.url(), settings_form(site_title=site_title))
        assert response.status_code == 302
        (_, _, record), = use_data.ops("insert")
        assert record["site_title"] == site_title

    def test_invalid_post_keeps_submitted_values(self, client, use_data):
        response = client.post(
            self.url(), settings_form(site_title="Typed", footer_text="Typed footer", posts_per_page="99"),
        )
        assert response.status_code == 400
        body = response.content.decode()
        assert 'value="Typed"' in body
        assert 'value="Typed footer"' in body
        assert 'value="99"' in body

    def test_load_error_is_shown(self, client, use_data):
        use_data.settings.errors["get_single"] = DataServiceError("permission denied for table settings")
        response = client.get(self.url())
        assert "permission denied for table settings" in response.content.decode()

    def test_reset_restores_stored_values(self, client, use_data):
        use_data.settings.single = dict(DEFAULT_SETTINGS, id=7, site_title="Stored")
        response = client.post(self.url(), settings_form(site_title="Unsaved", action="reset"))
        assert response.status_code == 200
        assert 'value="Stored"' in response.content.decode()
        assert use_data.ops("update") == []
