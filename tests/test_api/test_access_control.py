"""
The admin / super-admin gate on every mutating route.
"""
import pytest
from fastapi import status

PROFESSIONAL_BODY = {
    "name": "New Pro",
    "occupation": "Carpenter",
    "description": "Wood work",
    "detailed_description": "Furniture and repairs",
    "photo_url": "https://example.com/p.jpg",
    "whatsapp": "+5491100000002",
}

ADMIN_ROUTES = [
    ("post", "/api/professionals", PROFESSIONAL_BODY),
    ("patch", "/api/professionals/{professional_id}", {"name": "Renamed"}),
    ("post", "/api/categories", {"name": "Gardening"}),
    ("patch", "/api/categories/{category_id}", {"name": "Renamed"}),
    ("post", "/api/professionals/{professional_id}/categories/{category_id}", None),
    ("delete", "/api/professionals/{professional_id}/categories/{category_id}", None),
]

SUPER_ADMIN_ROUTES = [
    ("delete", "/api/professionals/{professional_id}", None),
    ("delete", "/api/categories/{category_id}", None),
    ("get", "/api/users", None),
    ("post", "/api/users", {"username": "bob", "password": "pw"}),
    ("patch", "/api/users/{user_id}/role", {"role": "admin"}),
    ("patch", "/api/users/{user_id}", {"username": "bobby"}),
    ("delete", "/api/users/{user_id}", None),
    ("patch", "/api/system-settings", {"show_ratings": False}),
]

AUTHENTICATED_ROUTES = [
    ("post", "/api/professionals/{professional_id}/rate", {"rating": 5}),
    ("get", "/api/recommendations", None),
    ("get", "/api/recommendations/stored", None),
    ("get", "/api/user", None),
]


@pytest.fixture
def ids(professional, category, plain_user):
    return {
        "professional_id": professional.id,
        "category_id": category.id,
        "user_id": plain_user.id,
    }


def _call(test_client, method, path, body, ids):
    kwargs = {"json": body} if body is not None else {}
    return test_client.request(method.upper(), path.format(**ids), **kwargs)


@pytest.mark.parametrize("method,path,body", ADMIN_ROUTES + SUPER_ADMIN_ROUTES + AUTHENTICATED_ROUTES)
def test_anonymous_gets_401(client, ids, method, path, body):
    response = _call(client, method, path, body, ids)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.parametrize("method,path,body", ADMIN_ROUTES + SUPER_ADMIN_ROUTES)
def test_plain_user_gets_403(user_client, ids, method, path, body):
    response = _call(user_client, method, path, body, ids)

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.parametrize("method,path,body", SUPER_ADMIN_ROUTES)
def test_admin_cannot_use_super_admin_routes(admin_client, ids, method, path, body):
    response = _call(admin_client, method, path, body, ids)

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/professionals"),
        ("get", "/api/professionals/{professional_id}"),
        ("get", "/api/professionals/{professional_id}/ratings"),
        ("get", "/api/professionals/{professional_id}/categories"),
        ("get", "/api/categories"),
        ("get", "/api/categories/home-repairs"),
        ("get", "/api/categories/{category_id}/subcategories"),
        ("get", "/api/categories/{category_id}/professionals"),
        ("get", "/api/system-settings"),
    ],
)
def test_read_routes_are_public(client, ids, method, path):
    response = _call(client, method, path, None, ids)

    assert response.status_code == status.HTTP_200_OK


def test_admin_can_curate(admin_client, ids):
    response = _call(admin_client, "post", "/api/professionals", PROFESSIONAL_BODY, ids)

    assert response.status_code == status.HTTP_201_CREATED
