try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from devsim_api.core.errors import MissingRequiredField
from devsim_api.models.auth import ProviderIdentity
from devsim_api.services.claims import map_claims


def test_map_claims_projects_github_fields() -> None:
    identity = ProviderIdentity.model_validate(
        {"login": "alice", "id": 42, "avatar_url": "http://x/a.png"}
    )

    assert map_claims(identity) == {
        "login": "alice",
        "id": "42",
        "avatar": "http://x/a.png",
    }


def test_map_claims_ignores_unmapped_fields() -> None:
    identity = ProviderIdentity.model_validate(
        {
            "login": "bob",
            "id": 7,
            "avatar_url": None,
            "node_id": "MDQ6VXNlcjc=",
            "public_repos": 12,
            "site_admin": False,
        }
    )

    assert map_claims(identity) == {"login": "bob", "id": "7"}


def test_map_claims_includes_optional_profile_fields() -> None:
    identity = ProviderIdentity(login="carol", id=3, name="Carol", email="carol@example.com")

    claims = map_claims(identity)

    assert claims["name"] == "Carol"
    assert claims["email"] == "carol@example.com"
    assert "avatar" not in claims


@pytest.mark.parametrize(
    ("payload", "missing"),
    [
        ({"id": 42}, "login"),
        ({"login": "", "id": 42}, "login"),
        ({"login": "alice"}, "id"),
    ],
)
def test_map_claims_requires_login_and_id(payload: dict, missing: str) -> None:
    identity = ProviderIdentity.model_validate(payload)

    with pytest.raises(MissingRequiredField) as exc_info:
        map_claims(identity)

    assert exc_info.value.field == missing
