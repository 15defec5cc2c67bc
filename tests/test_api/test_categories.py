"""
API tests for categories: slugs, hierarchy and admin CRUD.
"""
from fastapi import status

from prodirectory.db.models import Category, ProfessionalCategory
from prodirectory.services.categories import slugify


def test_slugify():
    assert slugify("Home Repairs") == "home-repairs"
    assert slugify("Plumbing & Gas  24h") == "plumbing-gas-24h"
    assert slugify("  Pre-school  ") == "pre-school"


class TestReads:

    def test_list_only_active(self, client, db_session):
        db_session.add_all([
            Category(name="Visible", slug="visible"),
            Category(name="Hidden", slug="hidden", is_active=False),
        ])
        db_session.commit()

        response = client.get("/api/categories")

        assert [c["slug"] for c in response.json()] == ["visible"]

    def test_get_by_slug(self, client, category):
        response = client.get("/api/categories/home-repairs")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == category.id

    def test_get_by_unknown_slug(self, client):
        assert client.get("/api/categories/nope").status_code == status.HTTP_404_NOT_FOUND

    def test_subcategories(self, client, db_session, category):
        db_session.add_all([
            Category(name="Plumbing", slug="plumbing", parent_id=category.id),
            Category(name="Painting", slug="painting", parent_id=category.id),
            Category(name="Unrelated", slug="unrelated"),
        ])
        db_session.commit()

        response = client.get(f"/api/categories/{category.id}/subcategories")

        assert [c["slug"] for c in response.json()] == ["plumbing", "painting"]


class TestCreate:

    def test_slug_derived_from_name(self, admin_client):
        response = admin_client.post("/api/categories", json={"name": "Garden & Pool Care"})

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["slug"] == "garden-pool-care"
        assert body["is_active"] is True
        assert body["parent_id"] is None

    def test_explicit_slug(self, admin_client):
        response = admin_client.post("/api/categories", json={"name": "Gardening", "slug": "green"})

        assert response.json()["slug"] == "green"

    def test_duplicate_slug(self, admin_client, category):
        response = admin_client.post("/api/categories", json={"name": "Home Repairs"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_slug(self, admin_client):
        response = admin_client.post("/api/categories", json={"name": "X", "slug": "has spaces"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_with_parent(self, admin_client, category):
        response = admin_client.post("/api/categories", json={"name": "Plumbing", "parent_id": category.id})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["parent_id"] == category.id

    def test_unknown_parent(self, admin_client):
        response = admin_client.post("/api/categories", json={"name": "Plumbing", "parent_id": 999})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestUpdate:

    def test_rename_and_deactivate(self, admin_client, category):
        response = admin_client.patch(
            f"/api/categories/{category.id}", json={"name": "Repairs", "is_active": False}
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["name"] == "Repairs"
        assert body["slug"] == "home-repairs"
        assert body["is_active"] is False

    def test_cannot_be_own_parent(self, admin_client, category):
        response = admin_client.patch(f"/api/categories/{category.id}", json={"parent_id": category.id})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_clear_parent(self, admin_client, db_session, category):
        child = Category(name="Child", slug="child", parent_id=category.id)
        db_session.add(child)
        db_session.commit()

        response = admin_client.patch(f"/api/categories/{child.id}", json={"parent_id": None})

        assert response.json()["parent_id"] is None

    def test_slug_conflict(self, admin_client, db_session, category):
        other = Category(name="Other", slug="other")
        db_session.add(other)
        db_session.commit()

        response = admin_client.patch(f"/api/categories/{other.id}", json={"slug": "home-repairs"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing(self, admin_client):
        assert admin_client.patch("/api/categories/999", json={"name": "X"}).status_code == status.HTTP_404_NOT_FOUND


class TestDelete:

    def test_detaches_everything(self, super_admin_client, db_session, category, professional_factory):
        child = Category(name="Child", slug="child", parent_id=category.id)
        db_session.add(child)
        primary = professional_factory("Primary", category_id=category.id)
        auxiliary = professional_factory("Auxiliary")
        db_session.commit()
        db_session.add(ProfessionalCategory(professional_id=auxiliary.id, category_id=category.id))
        db_session.commit()

        response = super_admin_client.delete(f"/api/categories/{category.id}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert db_session.get(Category, category.id) is None
        assert db_session.query(ProfessionalCategory).count() == 0
        db_session.refresh(child)
        db_session.refresh(primary)
        assert child.parent_id is None
        assert primary.category_id is None

    def test_missing(self, super_admin_client):
        assert super_admin_client.delete("/api/categories/999").status_code == status.HTTP_404_NOT_FOUND
