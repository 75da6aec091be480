"""Pydantic models for the canonical (x402 v2) configuration shape.

Every value that can carry a financial meaning (amount, asset, network,
payTo) is stored exactly as it was found in the input. These models never
coerce or correct; the rule modules report what is wrong with them.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models serialized with x402 camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AcceptsEntry(WireModel):
    """One offered payment method."""
    scheme: Any = None
    network: Any = None
    amount: Any = None  # digit string in atomic units when well-formed
    asset: Any = None
    pay_to: Any = None
    max_timeout_seconds: Any = None
    extra: Any = None

    model_config = ConfigDict(extra="ignore")


class Resource(WireModel):
    """The protected resource the payment unlocks."""
    url: Any = None
    description: Any = None
    mime_type: Any = None

    model_config = ConfigDict(extra="ignore")


class NormalizedConfig(WireModel):
    """Projection of any recognised config shape onto the current x402 version."""
    x402_version: Literal[2] = 2
    accepts: List[AcceptsEntry] = Field(default_factory=list)
    resource: Optional[Resource] = None
    extensions: Any = None

    def to_document(self) -> Dict[str, Any]:
        """Dump back to an x402 JSON document (camelCase, absent fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ManifestEndpoint(WireModel):
    """One endpoint synthesized from a manifest."""
    id: str
    url: Optional[str] = None
    method: str = "GET"
    document: Any = None  # embedded config document, as found
    config: Optional[NormalizedConfig] = None


class NormalizedManifest(WireModel):
    """Endpoint list recovered from a multi-endpoint document."""
    x402_version: Literal[2] = 2
    service: Optional[Dict[str, Any]] = None
    endpoints: Dict[str, ManifestEndpoint] = Field(default_factory=dict)
