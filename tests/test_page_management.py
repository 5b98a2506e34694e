"""
Test Case Suite: Content Pages
Test ID Range: TC-060 to TC-066

Strict page creation, idempotent upsert, public reads and deletion.
"""

import pytest
from httpx import AsyncClient


class TestPageManagement:
    """
    Test Case TC-060: Strict Create
    Description: POST /pages creates a page and refuses an existing slug
    Expected Result: 201, then 409 for the same slug
    """
    @pytest.mark.asyncio
    async def test_tc060_create_page(self, client: AsyncClient, admin_headers):
        """TC-060: Strict page create"""
        body = {"slug": "about", "title": "About Us", "content": "<p>Hello</p>"}

        created = await client.post("/pages", json=body, headers=admin_headers)
        assert created.status_code == 201
        assert created.json()["slug"] == "about"

        duplicate = await client.post("/pages", json={**body, "title": "Other"}, headers=admin_headers)
        assert duplicate.status_code == 409
        assert duplicate.json()["detail"] == "Slug already exists"

        page = await client.get("/pages/about")
        assert page.json()["title"] == "About Us"

    """
    Test Case TC-061: Upsert Creates Then Updates
    Description: PUT /pages/{slug} creates a missing page and updates an existing one
    Expected Result: Same id both times, latest title wins
    """
    @pytest.mark.asyncio
    async def test_tc061_upsert_page(self, client: AsyncClient, admin_headers):
        """TC-061: Idempotent upsert"""
        first = await client.put(
            "/pages/terms",
            json={"title": "Terms", "content": "v1", "meta_title": "Terms of use"},
            headers=admin_headers,
        )
        assert first.status_code == 200
        assert first.json()["content"] == "v1"

        second = await client.put("/pages/terms", json={"title": "Terms & Conditions"}, headers=admin_headers)
        assert second.status_code == 200
        data = second.json()
        assert data["id"] == first.json()["id"]
        assert data["title"] == "Terms & Conditions"
        assert data["content"] == "v1"

        repeat = await client.put("/pages/terms", json={"title": "Terms & Conditions"}, headers=admin_headers)
        assert repeat.json()["id"] == first.json()["id"]

        listing = await client.get("/pages", headers=admin_headers)
        assert [page["slug"] for page in listing.json()] == ["terms"]

    """
    Test Case TC-062: Public Page Read
    Description: Pages are readable without a token; unknown slugs are missing
    Expected Result: 200 then 404
    """
    @pytest.mark.asyncio
    async def test_tc062_public_page_read(self, client: AsyncClient, admin_headers):
        """TC-062: Public page read"""
        await client.put("/pages/contact", json={"title": "Contact", "content": "Call us"}, headers=admin_headers)

        found = await client.get("/pages/contact")
        assert found.status_code == 200
        assert found.json()["content"] == "Call us"

        missing = await client.get("/pages/unknown")
        assert missing.status_code == 404

    """
    Test Case TC-063: Page Slug Validation
    Description: Slugs must be lower-case words joined by single hyphens
    Expected Result: 400
    """
    @pytest.mark.asyncio
    @pytest.mark.parametrize("slug", ["About Us", "about--us", "-about", "about_us"])
    async def test_tc063_page_slug_validation(self, client: AsyncClient, admin_headers, slug):
        """TC-063: Invalid page slug"""
        response = await client.post("/pages", json={"slug": slug, "title": "About"}, headers=admin_headers)

        assert response.status_code == 400

    """
    Test Case TC-066: Upsert Slug Validation
    Description: PUT /pages/{slug} applies the same slug rules as strict create
    Expected Result: 400 for malformed slugs, nothing stored; upper-case slugs are lower-cased
    """
    @pytest.mark.asyncio
    @pytest.mark.parametrize("slug", ["About Us!!", "about--us", "-about", "about_us"])
    async def test_tc066_upsert_slug_validation(self, client: AsyncClient, admin_headers, slug):
        """TC-066: Invalid upsert slug"""
        response = await client.put(f"/pages/{slug}", json={"title": "About"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

        listing = await client.get("/pages", headers=admin_headers)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_tc066_upsert_slug_lowercased(self, client: AsyncClient, admin_headers):
        """TC-066: Upsert slug normalisation"""
        response = await client.put("/pages/Contact", json={"title": "Contact"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["slug"] == "contact"

        found = await client.get("/pages/contact")
        assert found.status_code == 200

    """
    Test Case TC-064: Upper-case Slug Normalised
    Description: An upper-case slug is stored lower-cased
    Expected Result: 201 with slug "faq"
    """
    @pytest.mark.asyncio
    async def test_tc064_slug_lowercased(self, client: AsyncClient, admin_headers):
        """TC-064: Slug normalisation"""
        response = await client.post("/pages", json={"slug": "FAQ", "title": "FAQ"}, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["slug"] == "faq"

    """
    Test Case TC-065: Delete Page
    Description: Admins can delete pages
    Expected Result: 204, page gone, second delete 404
    """
    @pytest.mark.asyncio
    async def test_tc065_delete_page(self, client: AsyncClient, admin_headers):
        """TC-065: Delete page"""
        await client.post("/pages", json={"slug": "privacy", "title": "Privacy"}, headers=admin_headers)

        response = await client.delete("/pages/privacy", headers=admin_headers)
        assert response.status_code == 204

        gone = await client.get("/pages/privacy")
        assert gone.status_code == 404

        again = await client.delete("/pages/privacy", headers=admin_headers)
        assert again.status_code == 404
