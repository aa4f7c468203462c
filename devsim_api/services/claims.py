"""Projection of GitHub user information onto session claims."""

from __future__ import annotations

from devsim_api.core.errors import MissingRequiredField
from devsim_api.models.auth import ClaimSet, ProviderIdentity

# Claim name -> ProviderIdentity attribute. Optional claims are only set when
# the provider returned a non-empty value.
REQUIRED_CLAIM_FIELDS = (("login", "login"), ("id", "id"))
OPTIONAL_CLAIM_FIELDS = (("avatar", "avatar_url"), ("name", "name"), ("email", "email"))


def map_claims(identity: ProviderIdentity) -> ClaimSet:
    """Build the claim set for ``identity``."""
    claims: ClaimSet = {}
    for claim, field in REQUIRED_CLAIM_FIELDS:
        value = getattr(identity, field)
        if value is None or value == "":
            raise MissingRequiredField(field)
        claims[claim] = str(value)
    for claim, field in OPTIONAL_CLAIM_FIELDS:
        value = getattr(identity, field)
        if value:
            claims[claim] = str(value)
    return claims


__all__ = ["map_claims"]
