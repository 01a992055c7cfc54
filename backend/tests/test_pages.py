"""
Album Catalog Backend: HTML Page Tests
=======================================

What:  Root redirect, album table, creation form and form submission.
How:   Redirects are not followed so status and Location can be checked.
"""

import pytest


class TestRootRedirect:

    @pytest.mark.asyncio
    async def test_root_redirects_permanently(self, test_client):
        """The root path moves permanently to /welcome/."""
        response = await test_client.get("/")

        assert response.status_code == 301
        assert response.headers["location"] == "/welcome/"


class TestAlbumIndex:

    @pytest.mark.asyncio
    async def test_empty_listing(self, test_client):
        """An empty catalog renders the empty-state text."""
        response = await test_client.get("/welcome/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "No albums yet." in response.text

    @pytest.mark.asyncio
    async def test_listing_shows_rows(self, test_client, sample_album_data):
        """Each album renders as one table row under the header."""
        await test_client.post("/albums", json=sample_album_data)
        await test_client.post(
            "/albums", json={"title": "Dookie", "artist": "Green Day", "review": 8}
        )

        response = await test_client.get("/welcome/")

        assert response.status_code == 200
        assert response.text.count("<tr>") == 3  # header + two albums
        assert "Nevermind" in response.text
        assert "Green Day" in response.text

    @pytest.mark.asyncio
    async def test_listing_escapes_html(self, test_client):
        """Album text is HTML-escaped."""
        await test_client.post(
            "/albums", json={"title": "<script>x</script>", "artist": "Band", "review": 1}
        )

        response = await test_client.get("/welcome/")

        assert "<script>x</script>" not in response.text
        assert "&lt;script&gt;" in response.text

    @pytest.mark.asyncio
    async def test_listing_storage_failure_is_bare_500(self, client_for, failing_repository):
        """Storage failure is a 500 with no body."""
        async with client_for(failing_repository) as client:
            response = await client.get("/welcome/")

        assert response.status_code == 500
        assert response.content == b""


class TestNewAlbumForm:

    @pytest.mark.asyncio
    async def test_form_page(self, test_client):
        """The form posts title, artist and review to /albums/new."""
        response = await test_client.get("/albums/new")

        assert response.status_code == 200
        assert 'action="/albums/new"' in response.text
        for field in ("title", "artist", "review"):
            assert f'name="{field}"' in response.text


class TestNewAlbumSubmit:

    @pytest.mark.asyncio
    async def test_valid_form_redirects_and_lists(self, test_client):
        """A complete form stores the album and redirects to the listing."""
        response = await test_client.post(
            "/albums/new", data={"title": "Nevermind", "artist": "Nirvana", "review": "9.5"}
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/welcome/"

        albums = (await test_client.get("/albums")).json()
        assert albums == [{"id": 1, "title": "Nevermind", "artist": "Nirvana", "review": 9.5}]

    @pytest.mark.asyncio
    async def test_zero_review_accepted(self, test_client):
        """A review of 0 is accepted from the form."""
        response = await test_client.post(
            "/albums/new", data={"title": "St. Anger", "artist": "Metallica", "review": "0"}
        )

        assert response.status_code == 302

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "form",
        [
            {"title": "", "artist": "Nirvana", "review": "9.5"},
            {"title": "Nevermind", "artist": "", "review": "9.5"},
            {"title": "Nevermind", "artist": "Nirvana", "review": ""},
            {"title": "Nevermind", "artist": "Nirvana"},
        ],
    )
    async def test_incomplete_form_rejected(self, test_client, form):
        """Missing fields give a bare 400 and store nothing."""
        response = await test_client.post("/albums/new", data=form)

        assert response.status_code == 400
        assert response.content == b""
        assert (await test_client.get("/albums")).json() == []

    @pytest.mark.asyncio
    async def test_unbindable_review_is_bad_request(self, test_client):
        """A non-numeric review gives a bare 400."""
        response = await test_client.post(
            "/albums/new", data={"title": "Nevermind", "artist": "Nirvana", "review": "ten"}
        )

        assert response.status_code == 400
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_storage_failure_is_bare_500(self, client_for, failing_repository):
        """Storage failure on submit is a 500 with no body."""
        async with client_for(failing_repository) as client:
            response = await client.post(
                "/albums/new", data={"title": "Nevermind", "artist": "Nirvana", "review": "9.5"}
            )

        assert response.status_code == 500
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_form_album_listed_on_sqlite(self, client_for, sql_repository):
        """A form submission on the database backend appears on the listing page."""
        async with client_for(sql_repository) as client:
            submitted = await client.post(
                "/albums/new", data={"title": "Bleach", "artist": "Nirvana", "review": "7"}
            )
            page = await client.get("/welcome/")

        assert submitted.status_code == 302
        assert "Bleach" in page.text
        assert page.text.count("<tr>") == 2
